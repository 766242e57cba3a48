"""Triage coordinator.

Wires validation, cluster reads and the diagnosis engine together. Error
ordering is strict so that no fetch happens for input that is already known
to be bad:

    pod name syntax -> namespace exists -> pod fetch -> events -> engine
"""

from __future__ import annotations

import time
from typing import Protocol

import structlog

from kubets.engine import aggregate_fleet, diagnose_pod, validate_pod_name
from kubets.errors import NamespaceNotFoundError, PodNotFoundError
from kubets.models.config import TriageConfig
from kubets.models.diagnosis import Diagnosis, FleetReport
from kubets.models.events import EventRecord, PodSnapshot

_log = structlog.get_logger(component="analyst.coordinator")


class Fetcher(Protocol):
    async def get_pod(self, name: str, namespace: str) -> PodSnapshot | None: ...

    async def list_pods(self, all_namespaces: bool = True, namespace: str = "default") -> list[PodSnapshot]: ...

    async def get_recent_events(self, pod_name: str, namespace: str, limit: int = 5) -> list[EventRecord]: ...

    async def namespace_exists(self, name: str) -> bool: ...


class TriageCoordinator:
    """Runs one single-pod diagnosis or one fleet scan per call."""

    def __init__(self, fetcher: Fetcher, config: TriageConfig | None = None) -> None:
        self._fetcher = fetcher
        self._config = config or TriageConfig()

    async def diagnose(self, name: str, namespace: str) -> Diagnosis:
        """Diagnose pod *name* in *namespace*.

        Raises:
            InvalidPodNameFormatError -- name fails syntax validation.
            NamespaceNotFoundError    -- namespace does not exist.
            PodNotFoundError          -- pod does not exist.
        """
        t_start = time.monotonic()
        validate_pod_name(name)
        await self._require_namespace(namespace)

        snapshot = await self._fetcher.get_pod(name, namespace)
        if snapshot is None:
            raise PodNotFoundError(name, namespace)

        limit = self._config.engine.event_limit
        events = await self._fetcher.get_recent_events(name, namespace, limit)
        diagnosis = diagnose_pod(snapshot, events, event_limit=limit)

        _log.info(
            "diagnosis complete",
            pod=name,
            namespace=namespace,
            phase=diagnosis.phase,
            outcome=str(diagnosis.outcome),
            duration_ms=round((time.monotonic() - t_start) * 1000.0, 1),
        )
        return diagnosis

    async def scan(self, all_namespaces: bool = True, namespace: str = "default") -> FleetReport:
        """Scan every pod in the cluster, or in a single namespace."""
        t_start = time.monotonic()
        if not all_namespaces:
            await self._require_namespace(namespace)

        snapshots = await self._fetcher.list_pods(all_namespaces=all_namespaces, namespace=namespace)
        report = aggregate_fleet(snapshots, workers=self._config.engine.fleet_workers)

        _log.info(
            "fleet scan complete",
            scope="all-namespaces" if all_namespaces else namespace,
            total=report.total_pods,
            running=report.running_pods,
            duration_ms=round((time.monotonic() - t_start) * 1000.0, 1),
        )
        return report

    async def _require_namespace(self, namespace: str) -> None:
        if not await self._fetcher.namespace_exists(namespace):
            raise NamespaceNotFoundError(namespace)
