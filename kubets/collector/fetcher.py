"""Read-only Kubernetes API access via kubernetes-asyncio.

KubeFetcher  -- CoreV1 reads (pods, events, namespaces) returning value objects.
connect      -- async context manager that loads cluster credentials and
                yields a KubeFetcher bound to a fresh ApiClient.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import aiohttp
from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
from kubernetes_asyncio import config as k8s_config  # type: ignore[import-untyped]
from kubernetes_asyncio.client.api_client import ApiClient  # type: ignore[import-untyped]
from kubernetes_asyncio.client.rest import ApiException  # type: ignore[import-untyped]

from kubets.collector.parse import event_from_dict, pod_from_dict, sort_events
from kubets.errors import ClusterAccessError
from kubets.models.config import ClusterConfig
from kubets.models.events import EventRecord, PodSnapshot
from kubets.observability.logging import get_logger

_log = get_logger("collector.fetcher")

_PAGE_SIZE = 500

_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def _api_error(action: str, exc: Exception) -> ClusterAccessError:
    if isinstance(exc, ApiException):
        detail = f"HTTP {exc.status} {exc.reason}".strip()
    else:
        detail = str(exc) or type(exc).__name__
    return ClusterAccessError(f"Failed to {action}: {detail}")


async def load_kube_config(context: str = "") -> None:
    """Load credentials from the in-cluster service account, else kubeconfig.

    A named *context* always uses kubeconfig.
    """
    if not context:
        try:
            k8s_config.load_incluster_config()
            _log.info("k8s client configured from in-cluster service account")
            return
        except k8s_config.ConfigException:
            pass
    try:
        await k8s_config.load_kube_config(context=context or None)
    except (k8s_config.ConfigException, OSError) as exc:
        raise ClusterAccessError(f"Unable to load Kubernetes configuration: {exc}") from exc
    _log.info("k8s client configured from kubeconfig", context=context or "<current>")


class KubeFetcher:
    """Fetcher backed by a kubernetes-asyncio ApiClient."""

    def __init__(self, api_client: ApiClient, request_timeout: int = 30) -> None:
        self._api_client = api_client
        self._v1 = k8s_client.CoreV1Api(api_client)
        self._timeout = request_timeout

    def _to_dict(self, obj: Any) -> dict[str, Any]:
        return self._api_client.sanitize_for_serialization(obj)  # type: ignore[no-any-return]

    async def _list_all(self, action: str, call: Callable[..., Awaitable[Any]], **kwargs: Any) -> list[Any]:
        """Follow ``continue`` tokens until the full list has been read."""
        items: list[Any] = []
        token: str | None = None
        while True:
            if token:
                kwargs["_continue"] = token
            try:
                resp = await call(limit=_PAGE_SIZE, _request_timeout=self._timeout, **kwargs)
            except (ApiException, *_TRANSPORT_ERRORS) as exc:
                raise _api_error(action, exc) from exc
            items.extend(resp.items or [])
            token = getattr(resp.metadata, "_continue", None) if resp.metadata else None
            if not token:
                return items

    async def namespace_exists(self, name: str) -> bool:
        try:
            await self._v1.read_namespace(name=name, _request_timeout=self._timeout)
        except ApiException as exc:
            if exc.status == 404:
                return False
            raise _api_error(f"read namespace {name!r}", exc) from exc
        except _TRANSPORT_ERRORS as exc:
            raise _api_error(f"read namespace {name!r}", exc) from exc
        return True

    async def get_pod(self, name: str, namespace: str) -> PodSnapshot | None:
        """Return the pod, or None when the API reports 404."""
        try:
            pod = await self._v1.read_namespaced_pod(
                name=name,
                namespace=namespace,
                _request_timeout=self._timeout,
            )
        except ApiException as exc:
            if exc.status == 404:
                return None
            raise _api_error(f"read pod {namespace}/{name}", exc) from exc
        except _TRANSPORT_ERRORS as exc:
            raise _api_error(f"read pod {namespace}/{name}", exc) from exc
        return pod_from_dict(self._to_dict(pod))

    async def list_pods(self, all_namespaces: bool = True, namespace: str = "default") -> list[PodSnapshot]:
        if all_namespaces:
            items = await self._list_all("list pods", self._v1.list_pod_for_all_namespaces)
        else:
            items = await self._list_all(
                f"list pods in {namespace!r}",
                self._v1.list_namespaced_pod,
                namespace=namespace,
            )
        _log.debug("pods_listed", count=len(items), all_namespaces=all_namespaces)
        return [pod_from_dict(self._to_dict(p)) for p in items]

    async def get_recent_events(self, pod_name: str, namespace: str, limit: int = 5) -> list[EventRecord]:
        """Return the newest *limit* events for the pod, oldest first."""
        items = await self._list_all(
            f"list events for {namespace}/{pod_name}",
            self._v1.list_namespaced_event,
            namespace=namespace,
            field_selector=f"involvedObject.kind=Pod,involvedObject.name={pod_name}",
        )
        events = sort_events(event_from_dict(self._to_dict(e)) for e in items)
        if limit <= 0:
            return []
        return events[-limit:]


@asynccontextmanager
async def connect(cluster: ClusterConfig) -> AsyncIterator[KubeFetcher]:
    """Yield a KubeFetcher; the underlying HTTP session is closed on exit."""
    await load_kube_config(cluster.kube_context)
    async with ApiClient() as api_client:
        yield KubeFetcher(api_client, request_timeout=cluster.request_timeout)
