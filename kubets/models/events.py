"""Core pod, container and event data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class PodPhase(StrEnum):
    """Pod lifecycle phase as reported by the API server.

    Snapshots store the phase as a plain string so that phases outside this
    set are carried verbatim.
    """

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class StateKind(StrEnum):
    """Which of the three container states is active."""

    WAITING = "Waiting"
    RUNNING = "Running"
    TERMINATED = "Terminated"


class EventType(StrEnum):
    """Kubernetes event type."""

    NORMAL = "Normal"
    WARNING = "Warning"


@dataclass(frozen=True)
class WaitingState:
    """Container has not started yet (pulling, backing off, creating)."""

    reason: str | None = None
    message: str | None = None

    @property
    def kind(self) -> StateKind:
        return StateKind.WAITING


@dataclass(frozen=True)
class RunningState:
    """Container process is running."""

    started_at: datetime | None = None

    @property
    def kind(self) -> StateKind:
        return StateKind.RUNNING


@dataclass(frozen=True)
class TerminatedState:
    """Container process exited."""

    reason: str | None = None
    message: str | None = None
    exit_code: int | None = None

    @property
    def kind(self) -> StateKind:
        return StateKind.TERMINATED


ContainerState = WaitingState | RunningState | TerminatedState


@dataclass(frozen=True)
class ContainerStatus:
    """Status of one container inside a pod snapshot."""

    name: str
    state: ContainerState
    restart_count: int = 0
    image: str | None = None
    last_termination_reason: str | None = None

    @property
    def state_kind(self) -> StateKind:
        return self.state.kind


@dataclass(frozen=True)
class PodSnapshot:
    """Point-in-time read of a single pod.

    Produced by the collector, consumed by the engine. Immutable: no
    component may mutate a snapshot after creation.
    """

    name: str
    namespace: str
    phase: str
    container_statuses: tuple[ContainerStatus, ...] = ()

    @property
    def total_restart_count(self) -> int:
        return sum(cs.restart_count for cs in self.container_statuses)


@dataclass(frozen=True)
class EventRecord:
    """A Kubernetes event attached to a pod."""

    timestamp: datetime | None
    involved_object_name: str
    reason: str
    message: str
    type: str = EventType.NORMAL
    count: int = 1
