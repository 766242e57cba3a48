"""Diagnosis and fleet report data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from kubets.models.events import EventRecord, StateKind


class Outcome(StrEnum):
    """Overall verdict attached to a single-pod diagnosis."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class ContainerFinding:
    """Normalized view of one container's state.

    ``reason`` and ``message`` are None when the active state carries none;
    the "N/A" placeholder is applied only when rendering.
    """

    name: str
    state_kind: StateKind
    reason: str | None = None
    message: str | None = None
    restart_count: int = 0
    exit_code: int | None = None
    last_termination_reason: str | None = None


@dataclass(frozen=True)
class RestartWarning:
    """Attached to a diagnosis when any container has restarted."""

    total_restarts: int
    suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Diagnosis:
    """Structured result of diagnosing one pod snapshot.

    Contract between the engine and every reporter (text, JSON).
    ``container_suggestions`` holds ``(container, suggestions)`` pairs in
    container order, only for containers that have any.
    """

    name: str
    namespace: str
    phase: str
    outcome: Outcome
    findings: tuple[ContainerFinding, ...] = ()
    suggestions: tuple[str, ...] = ()
    container_suggestions: tuple[tuple[str, tuple[str, ...]], ...] = ()
    total_restart_count: int = 0
    restart_warning: RestartWarning | None = None
    recent_events: tuple[EventRecord, ...] = ()

    def suggestions_for(self, container: str) -> tuple[str, ...]:
        """Container-specific suggestions, or an empty tuple."""
        for name, suggestions in self.container_suggestions:
            if name == container:
                return suggestions
        return ()


@dataclass(frozen=True)
class FailureBlock:
    """Facts about one non-Running pod found during a fleet scan."""

    namespace: str
    name: str
    phase: str
    findings: tuple[ContainerFinding, ...] = ()
    total_restart_count: int = 0


@dataclass(frozen=True)
class FleetReport:
    """Result of a fleet scan. ``failure_blocks`` is in scan order."""

    total_pods: int = 0
    running_pods: int = 0
    failure_blocks: tuple[FailureBlock, ...] = ()

    @property
    def failing_pods(self) -> int:
        return len(self.failure_blocks)
