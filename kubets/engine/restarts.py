"""Restart accounting."""

from __future__ import annotations

from collections.abc import Iterable

from kubets.models.events import ContainerStatus

RESTART_SUGGESTIONS: tuple[str, ...] = (
    "check container logs for crash information: `kubectl logs {pod} -n {namespace} --previous`",
    "verify resource limits and requests",
    "check liveness and readiness probe configuration",
)


def total_restarts(statuses: Iterable[ContainerStatus]) -> int:
    """Sum restart counts across containers. A pod without containers has zero."""
    return sum(cs.restart_count for cs in statuses)


def warrants_warning(total: int) -> bool:
    return total > 0


def restart_suggestions(pod: str, namespace: str) -> tuple[str, ...]:
    return tuple(t.format(pod=pod, namespace=namespace) for t in RESTART_SUGGESTIONS)
