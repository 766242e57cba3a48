"""Remediation suggestion rule tables.

Two independent tables are kept on purpose:

PHASE_RULES      -- answer "why is the pod stuck", keyed by pod phase and
                    matched against the reasons of all containers.
CONTAINER_RULES  -- answer "why is this container stuck", matched against a
                    single container's own reason.

Within a table the first matching rule wins. A rule with ``reasons=None``
matches unconditionally and is used as the fallback. Reason matching is a
case-sensitive exact comparison; unknown reasons simply yield nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from kubets.models.diagnosis import ContainerFinding
from kubets.models.events import PodPhase

IMAGE_PULL_REASONS = frozenset({"ImagePullBackOff", "ErrImagePull"})

_DESCRIBE = "inspect the pod with `kubectl describe pod {pod} -n {namespace}`"


@dataclass(frozen=True)
class SuggestionRule:
    """One row of a suggestion table."""

    rule_id: str
    templates: tuple[str, ...]
    reasons: frozenset[str] | None = None

    def match(self, reasons: Iterable[str | None]) -> bool:
        if self.reasons is None:
            return True
        return any(r in self.reasons for r in reasons if r is not None)

    def render(self, **values: str) -> tuple[str, ...]:
        return tuple(t.format(**values) for t in self.templates)


PENDING_IMAGE_PULL = SuggestionRule(
    rule_id="pending_image_pull",
    reasons=IMAGE_PULL_REASONS,
    templates=(
        "check image name and tag",
        "check that the image registry exists and is reachable from the cluster",
        "verify imagePullSecrets if the registry is private",
        _DESCRIBE,
    ),
)

PENDING_RESOURCE_PRESSURE = SuggestionRule(
    rule_id="pending_resource_pressure",
    templates=(
        "check node CPU and memory pressure (`kubectl top nodes`)",
        _DESCRIBE,
    ),
)

FAILED_GENERIC = SuggestionRule(
    rule_id="failed_generic",
    templates=(
        "check container logs: `kubectl logs {pod} -n {namespace}`",
        "check pod events: `kubectl describe pod {pod} -n {namespace}`",
    ),
)

CONTAINER_IMAGE_PULL = SuggestionRule(
    rule_id="container_image_pull",
    reasons=IMAGE_PULL_REASONS,
    templates=(
        "verify the image name for container {container}",
        "verify the node has access to the image registry",
        "try pulling the image manually: `docker pull {image}`",
    ),
)

PHASE_RULES: dict[str, tuple[SuggestionRule, ...]] = {
    PodPhase.PENDING.value: (PENDING_IMAGE_PULL, PENDING_RESOURCE_PRESSURE),
    PodPhase.FAILED.value: (FAILED_GENERIC,),
}

CONTAINER_RULES: tuple[SuggestionRule, ...] = (CONTAINER_IMAGE_PULL,)


def dedupe(items: Iterable[str]) -> tuple[str, ...]:
    """Drop repeated suggestions, keeping the first occurrence."""
    return tuple(dict.fromkeys(items))


def _first_match(rules: Sequence[SuggestionRule], reasons: Sequence[str | None]) -> SuggestionRule | None:
    for rule in rules:
        if rule.match(reasons):
            return rule
    return None


def phase_suggestions(
    phase: str,
    findings: Sequence[ContainerFinding],
    pod: str,
    namespace: str,
) -> tuple[str, ...]:
    """Suggestions for the pod as a whole. Phases without rules yield none."""
    rules = PHASE_RULES.get(str(phase), ())
    rule = _first_match(rules, [f.reason for f in findings])
    if rule is None:
        return ()
    return dedupe(rule.render(pod=pod, namespace=namespace))


def container_suggestions(
    finding: ContainerFinding,
    pod: str,
    namespace: str,
    image: str | None = None,
) -> tuple[str, ...]:
    """Suggestions for a single container, independent of the pod phase."""
    rule = _first_match(CONTAINER_RULES, [finding.reason])
    if rule is None:
        return ()
    return dedupe(
        rule.render(
            pod=pod,
            namespace=namespace,
            container=finding.name,
            image=image or "<image>",
        )
    )
