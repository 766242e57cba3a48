"""Core data structures for kubets."""

from kubets.models.config import TriageConfig
from kubets.models.diagnosis import (
    ContainerFinding,
    Diagnosis,
    FailureBlock,
    FleetReport,
    Outcome,
    RestartWarning,
)
from kubets.models.events import (
    ContainerState,
    ContainerStatus,
    EventRecord,
    EventType,
    PodPhase,
    PodSnapshot,
    RunningState,
    StateKind,
    TerminatedState,
    WaitingState,
)

__all__ = [
    "ContainerFinding",
    "ContainerState",
    "ContainerStatus",
    "Diagnosis",
    "EventRecord",
    "EventType",
    "FailureBlock",
    "FleetReport",
    "Outcome",
    "PodPhase",
    "PodSnapshot",
    "RestartWarning",
    "RunningState",
    "StateKind",
    "TerminatedState",
    "TriageConfig",
    "WaitingState",
]
