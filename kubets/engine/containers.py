"""Container state normalization."""

from __future__ import annotations

from kubets.models.diagnosis import ContainerFinding
from kubets.models.events import ContainerStatus, RunningState, TerminatedState


def analyze_container(status: ContainerStatus) -> ContainerFinding:
    """Extract the active state's kind, reason and message from *status*."""
    state = status.state
    if isinstance(state, RunningState):
        reason = message = None
    else:
        reason, message = state.reason, state.message
    exit_code = state.exit_code if isinstance(state, TerminatedState) else None
    return ContainerFinding(
        name=status.name,
        state_kind=state.kind,
        reason=reason,
        message=message,
        restart_count=status.restart_count,
        exit_code=exit_code,
        last_termination_reason=status.last_termination_reason,
    )


def analyze_containers(statuses: tuple[ContainerStatus, ...] | list[ContainerStatus]) -> tuple[ContainerFinding, ...]:
    return tuple(analyze_container(cs) for cs in statuses)
