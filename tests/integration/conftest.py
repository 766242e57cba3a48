"""Shared fixtures for kubets integration tests.

Provides an in-memory Fetcher and snapshot factories so the coordinator and
CLI pipelines can be exercised without touching a real cluster.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

import pytest

from kubets.models.events import (
    ContainerState,
    ContainerStatus,
    EventRecord,
    PodSnapshot,
    RunningState,
    TerminatedState,
    WaitingState,
)

_NOW = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Snapshot factories
# ---------------------------------------------------------------------------


def make_container(
    name: str = "app",
    state: ContainerState | None = None,
    restart_count: int = 0,
    image: str | None = "registry.local/app:1.0",
) -> ContainerStatus:
    return ContainerStatus(name=name, state=state or RunningState(), restart_count=restart_count, image=image)


def make_pod(
    name: str = "web-1",
    namespace: str = "default",
    phase: str = "Running",
    containers: Iterable[ContainerStatus] | None = None,
) -> PodSnapshot:
    return PodSnapshot(
        name=name,
        namespace=namespace,
        phase=phase,
        container_statuses=tuple(containers if containers is not None else [make_container()]),
    )


def make_image_pull_pod(name: str = "web-1", namespace: str = "default") -> PodSnapshot:
    return make_pod(
        name=name,
        namespace=namespace,
        phase="Pending",
        containers=[
            make_container(
                state=WaitingState(
                    reason="ImagePullBackOff",
                    message='Back-off pulling image "registry.local/app:missing"',
                ),
                image="registry.local/app:missing",
            )
        ],
    )


def make_failed_pod(name: str = "job-1", namespace: str = "batch") -> PodSnapshot:
    return make_pod(
        name=name,
        namespace=namespace,
        phase="Failed",
        containers=[make_container(name="job", state=TerminatedState(reason="Error", message="exit 1", exit_code=1))],
    )


def make_events(pod: str, count: int) -> list[EventRecord]:
    return [
        EventRecord(
            timestamp=_NOW - timedelta(minutes=count - i),
            involved_object_name=pod,
            reason="BackOff" if i % 2 else "Pulling",
            message=f"event {i}",
            type="Warning" if i % 2 else "Normal",
        )
        for i in range(count)
    ]


# ---------------------------------------------------------------------------
# Fake fetcher
# ---------------------------------------------------------------------------


class FakeFetcher:
    """In-memory Fetcher that records every call."""

    def __init__(
        self,
        pods: Iterable[PodSnapshot] = (),
        namespaces: Iterable[str] = ("default",),
        events: dict[str, list[EventRecord]] | None = None,
    ) -> None:
        self.pods = list(pods)
        self.namespaces = set(namespaces) | {p.namespace for p in self.pods}
        self.events = events or {}
        self.calls: list[tuple[str, tuple]] = []

    async def namespace_exists(self, name: str) -> bool:
        self.calls.append(("namespace_exists", (name,)))
        return name in self.namespaces

    async def get_pod(self, name: str, namespace: str) -> PodSnapshot | None:
        self.calls.append(("get_pod", (name, namespace)))
        for pod in self.pods:
            if pod.name == name and pod.namespace == namespace:
                return pod
        return None

    async def list_pods(self, all_namespaces: bool = True, namespace: str = "default") -> list[PodSnapshot]:
        self.calls.append(("list_pods", (all_namespaces, namespace)))
        if all_namespaces:
            return list(self.pods)
        return [p for p in self.pods if p.namespace == namespace]

    async def get_recent_events(self, pod_name: str, namespace: str, limit: int = 5) -> list[EventRecord]:
        self.calls.append(("get_recent_events", (pod_name, namespace, limit)))
        return self.events.get(pod_name, [])[-limit:]

    def called(self, method: str) -> bool:
        return any(name == method for name, _ in self.calls)


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher(
        pods=[
            make_image_pull_pod(),
            make_pod(name="db-1", containers=[make_container("db", restart_count=3), make_container("exporter", restart_count=3)]),
            make_failed_pod(),
        ],
        namespaces=["default", "batch", "kube-system"],
        events={"web-1": make_events("web-1", 8)},
    )


@pytest.fixture
def patch_connect(monkeypatch: pytest.MonkeyPatch, fake_fetcher: FakeFetcher) -> FakeFetcher:
    """Route the CLI's cluster connection to the fake fetcher."""

    @asynccontextmanager
    async def _connect(_cluster):
        yield fake_fetcher

    monkeypatch.setattr(importlib.import_module("kubets.cli.main"), "connect", _connect)
    return fake_fetcher


@pytest.fixture()
def missing_kubeconfig(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Leave the real cluster connection in place with no usable credentials."""
    monkeypatch.delenv("KUBERNETES_SERVICE_HOST", raising=False)
    monkeypatch.delenv("KUBETS_KUBE_CONTEXT", raising=False)
    monkeypatch.setattr(
        "kubernetes_asyncio.config.kube_config.KUBE_CONFIG_DEFAULT_LOCATION",
        str(tmp_path / "missing-kubeconfig"),
    )
