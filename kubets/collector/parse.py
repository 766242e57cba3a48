"""Conversion of JSON-shaped Kubernetes API objects into value objects.

Input dicts use the API's camelCase field names, as returned by
``ApiClient.sanitize_for_serialization`` or ``kubectl get -o json``.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from kubets.errors import SnapshotFormatError
from kubets.models.events import (
    ContainerState,
    ContainerStatus,
    EventRecord,
    EventType,
    PodPhase,
    PodSnapshot,
    RunningState,
    TerminatedState,
    WaitingState,
)

_STATE_KEYS = ("waiting", "running", "terminated")


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an RFC 3339 timestamp (or pass through a datetime)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        ts = value
    else:
        try:
            ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _state_from_dict(container: str, raw: dict[str, Any] | None) -> ContainerState:
    present = [k for k in _STATE_KEYS if (raw or {}).get(k) is not None]
    if len(present) != 1:
        raise SnapshotFormatError(
            f"Container {container!r} must report exactly one state, got: {present or 'none'}"
        )
    kind = present[0]
    body: dict[str, Any] = raw[kind]  # type: ignore[index]
    if kind == "waiting":
        return WaitingState(reason=body.get("reason") or None, message=body.get("message") or None)
    if kind == "running":
        return RunningState(started_at=parse_timestamp(body.get("startedAt")))
    return TerminatedState(
        reason=body.get("reason") or None,
        message=body.get("message") or None,
        exit_code=body.get("exitCode"),
    )


def container_status_from_dict(raw: dict[str, Any]) -> ContainerStatus:
    name = raw.get("name", "")
    last_terminated = (raw.get("lastState") or {}).get("terminated") or {}
    return ContainerStatus(
        name=name,
        state=_state_from_dict(name, raw.get("state")),
        restart_count=max(int(raw.get("restartCount") or 0), 0),
        image=raw.get("image") or None,
        last_termination_reason=last_terminated.get("reason") or None,
    )


def pod_from_dict(raw: dict[str, Any]) -> PodSnapshot:
    """Build a PodSnapshot from a v1.Pod dict."""
    metadata = raw.get("metadata") or {}
    status = raw.get("status") or {}
    name = metadata.get("name")
    if not name:
        raise SnapshotFormatError("Pod object has no metadata.name")
    return PodSnapshot(
        name=name,
        namespace=metadata.get("namespace", ""),
        phase=status.get("phase") or PodPhase.UNKNOWN.value,
        container_statuses=tuple(
            container_status_from_dict(cs) for cs in status.get("containerStatuses") or []
        ),
    )


def event_from_dict(raw: dict[str, Any]) -> EventRecord:
    """Build an EventRecord from a v1.Event dict.

    The timestamp prefers lastTimestamp, then eventTime, firstTimestamp and
    finally the object's creationTimestamp.
    """
    metadata = raw.get("metadata") or {}
    timestamp = None
    for candidate in (
        raw.get("lastTimestamp"),
        raw.get("eventTime"),
        raw.get("firstTimestamp"),
        metadata.get("creationTimestamp"),
    ):
        timestamp = parse_timestamp(candidate)
        if timestamp is not None:
            break
    return EventRecord(
        timestamp=timestamp,
        involved_object_name=(raw.get("involvedObject") or {}).get("name", ""),
        reason=raw.get("reason") or "",
        message=raw.get("message") or "",
        type=raw.get("type") or EventType.NORMAL.value,
        count=int(raw.get("count") or 1),
    )


def sort_events(events: Iterable[EventRecord]) -> list[EventRecord]:
    """Order events oldest first. Events without a timestamp sort first."""
    epoch = datetime.min.replace(tzinfo=UTC)
    return sorted(events, key=lambda e: e.timestamp or epoch)
