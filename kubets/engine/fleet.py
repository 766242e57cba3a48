"""Fleet scan aggregation.

Each pod is classified independently into a partial tally; the partials are
then folded, in input order, into one immutable FleetReport. Classification
may run on a thread pool (``workers > 1``). ``Executor.map`` yields results
in submission order, so the failure blocks always follow scan order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import reduce

from kubets.engine.containers import analyze_containers
from kubets.engine.restarts import total_restarts
from kubets.models.diagnosis import FailureBlock, FleetReport
from kubets.models.events import PodPhase, PodSnapshot
from kubets.observability.logging import get_logger

_logger = get_logger("engine.fleet")


@dataclass(frozen=True)
class _PodTally:
    running: bool
    block: FailureBlock | None = None


def classify_pod(snapshot: PodSnapshot) -> _PodTally:
    if snapshot.phase == PodPhase.RUNNING:
        return _PodTally(running=True)
    return _PodTally(
        running=False,
        block=FailureBlock(
            namespace=snapshot.namespace,
            name=snapshot.name,
            phase=snapshot.phase,
            findings=analyze_containers(snapshot.container_statuses),
            total_restart_count=total_restarts(snapshot.container_statuses),
        ),
    )


def _fold(report: FleetReport, tally: _PodTally) -> FleetReport:
    blocks = report.failure_blocks if tally.block is None else (*report.failure_blocks, tally.block)
    return FleetReport(
        total_pods=report.total_pods + 1,
        running_pods=report.running_pods + (1 if tally.running else 0),
        failure_blocks=blocks,
    )


def _classify_all(snapshots: Sequence[PodSnapshot], workers: int) -> Iterable[_PodTally]:
    if workers <= 1 or len(snapshots) < 2:
        return [classify_pod(s) for s in snapshots]
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="kubets-fleet") as pool:
        return list(pool.map(classify_pod, snapshots))


def aggregate_fleet(snapshots: Iterable[PodSnapshot], workers: int = 1) -> FleetReport:
    """Tally running pods and collect failure blocks for every other pod."""
    pods = list(snapshots)
    report = reduce(_fold, _classify_all(pods, workers), FleetReport())
    _logger.debug(
        "fleet_aggregated",
        total=report.total_pods,
        running=report.running_pods,
        failing=report.failing_pods,
        workers=workers,
    )
    return report
