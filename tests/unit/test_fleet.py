"""Tests for fleet scan aggregation."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kubets.engine.fleet import aggregate_fleet, classify_pod
from kubets.models.events import ContainerStatus, PodSnapshot, RunningState, TerminatedState, WaitingState

_PHASES = ["Running", "Pending", "Failed", "Succeeded", "Unknown"]


def _make_pod(name: str, phase: str, namespace: str = "default", restarts: int = 0) -> PodSnapshot:
    if phase == "Running":
        state = RunningState()
    elif phase == "Pending":
        state = WaitingState(reason="ImagePullBackOff", message="Back-off pulling image")
    else:
        state = TerminatedState(reason="Error", exit_code=1)
    return PodSnapshot(
        name=name,
        namespace=namespace,
        phase=phase,
        container_statuses=(ContainerStatus(name="app", state=state, restart_count=restarts),),
    )


class TestAggregate:
    def test_empty_fleet(self) -> None:
        report = aggregate_fleet([])
        assert report.total_pods == 0
        assert report.running_pods == 0
        assert report.failure_blocks == ()

    def test_all_running(self) -> None:
        report = aggregate_fleet([_make_pod(f"p{i}", "Running") for i in range(3)])
        assert report.total_pods == 3
        assert report.running_pods == 3
        assert report.failure_blocks == ()

    def test_failure_block_contents(self) -> None:
        report = aggregate_fleet([_make_pod("db-0", "Failed", namespace="data", restarts=2)])
        block = report.failure_blocks[0]
        assert (block.namespace, block.name, block.phase) == ("data", "db-0", "Failed")
        assert block.findings[0].reason == "Error"
        assert block.findings[0].exit_code == 1
        assert block.total_restart_count == 2

    def test_succeeded_pods_are_reported_as_not_running(self) -> None:
        report = aggregate_fleet([_make_pod("job-1", "Succeeded")])
        assert report.running_pods == 0
        assert report.failing_pods == 1

    def test_interleaved_order_is_preserved(self) -> None:
        pods = [
            _make_pod("a", "Failed"),
            _make_pod("b", "Running"),
            _make_pod("c", "Pending"),
            _make_pod("d", "Running"),
            _make_pod("e", "Unknown"),
        ]
        report = aggregate_fleet(pods)
        assert [b.name for b in report.failure_blocks] == ["a", "c", "e"]

    @pytest.mark.parametrize("workers", [1, 2, 8])
    def test_parallel_classification_preserves_order(self, workers: int) -> None:
        pods = [_make_pod(f"p{i}", _PHASES[i % len(_PHASES)]) for i in range(200)]
        expected = [p.name for p in pods if p.phase != "Running"]
        report = aggregate_fleet(pods, workers=workers)
        assert [b.name for b in report.failure_blocks] == expected
        assert report.total_pods == 200

    def test_accepts_generator(self) -> None:
        report = aggregate_fleet(_make_pod(f"p{i}", "Running") for i in range(4))
        assert report.total_pods == 4


class TestClassifyPod:
    def test_running_has_no_block(self) -> None:
        tally = classify_pod(_make_pod("a", "Running"))
        assert tally.running is True
        assert tally.block is None

    def test_non_running_has_block(self) -> None:
        tally = classify_pod(_make_pod("a", "Pending"))
        assert tally.running is False
        assert tally.block is not None
        assert tally.block.findings[0].reason == "ImagePullBackOff"


class TestProperties:
    @given(st.lists(st.sampled_from(_PHASES), max_size=40), st.integers(min_value=1, max_value=4))
    def test_tally_invariant_and_order(self, phases: list[str], workers: int) -> None:
        pods = [_make_pod(f"p{i}", phase) for i, phase in enumerate(phases)]
        report = aggregate_fleet(pods, workers=workers)
        assert report.running_pods + len(report.failure_blocks) == report.total_pods == len(pods)
        assert report.running_pods <= report.total_pods
        assert [b.name for b in report.failure_blocks] == [p.name for p in pods if p.phase != "Running"]
