"""Single-pod diagnosis.

Classification is computed once per snapshot:

    Running                      -> success, no phase suggestions
    Pending                      -> warning, Pending rule table
    Failed                       -> error,   Failed rule table
    Succeeded / Unknown / other  -> info,    no suggestions, phase verbatim

Every branch carries the full container finding list, the restart analysis
and the most recent events.
"""

from __future__ import annotations

from collections.abc import Sequence

from kubets.engine.containers import analyze_containers
from kubets.engine.restarts import restart_suggestions, total_restarts, warrants_warning
from kubets.engine.suggestions import container_suggestions, dedupe, phase_suggestions
from kubets.models.diagnosis import Diagnosis, Outcome, RestartWarning
from kubets.models.events import EventRecord, PodPhase, PodSnapshot
from kubets.observability.logging import get_logger

_logger = get_logger("engine.diagnoser")

MAX_RECENT_EVENTS = 5

_OUTCOMES: dict[str, Outcome] = {
    PodPhase.RUNNING.value: Outcome.SUCCESS,
    PodPhase.PENDING.value: Outcome.WARNING,
    PodPhase.FAILED.value: Outcome.ERROR,
}


def classify_phase(phase: str) -> Outcome:
    return _OUTCOMES.get(str(phase), Outcome.INFO)


def _recent(events: Sequence[EventRecord], limit: int) -> tuple[EventRecord, ...]:
    """Return the last *limit* events, assuming ascending timestamp order."""
    if limit <= 0:
        return ()
    return tuple(events[-limit:])


def diagnose_pod(
    snapshot: PodSnapshot,
    events: Sequence[EventRecord] = (),
    event_limit: int = MAX_RECENT_EVENTS,
) -> Diagnosis:
    """Diagnose one pod snapshot.

    Args:
        snapshot:    The pod as read from the API server.
        events:      Events for the pod, oldest first.
        event_limit: How many of the newest events to keep (capped at 5).
    """
    findings = analyze_containers(snapshot.container_statuses)
    outcome = classify_phase(snapshot.phase)
    suggestions = list(phase_suggestions(snapshot.phase, findings, snapshot.name, snapshot.namespace))

    restarts = total_restarts(snapshot.container_statuses)
    restart_warning = None
    if warrants_warning(restarts):
        restart_warning = RestartWarning(
            total_restarts=restarts,
            suggestions=restart_suggestions(snapshot.name, snapshot.namespace),
        )
        suggestions.extend(restart_warning.suggestions)

    per_container: list[tuple[str, tuple[str, ...]]] = []
    for status, finding in zip(snapshot.container_statuses, findings, strict=True):
        found = container_suggestions(finding, snapshot.name, snapshot.namespace, image=status.image)
        if found:
            per_container.append((finding.name, found))

    _logger.debug(
        "pod_diagnosed",
        pod=snapshot.name,
        namespace=snapshot.namespace,
        phase=snapshot.phase,
        outcome=str(outcome),
        restarts=restarts,
    )

    return Diagnosis(
        name=snapshot.name,
        namespace=snapshot.namespace,
        phase=snapshot.phase,
        outcome=outcome,
        findings=findings,
        suggestions=dedupe(suggestions),
        container_suggestions=tuple(per_container),
        total_restart_count=restarts,
        restart_warning=restart_warning,
        recent_events=_recent(events, min(event_limit, MAX_RECENT_EVENTS)),
    )
