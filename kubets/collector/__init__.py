"""Collector package for kubets.

Reads pods, events and namespaces from the Kubernetes API and turns them
into immutable snapshots for the diagnosis engine.

Submodules
----------
parse   -- JSON-shaped API objects -> PodSnapshot / EventRecord.
fetcher -- KubeFetcher: kubernetes-asyncio CoreV1 reads, 404 -> None/False.
"""

from kubets.collector.fetcher import KubeFetcher, connect
from kubets.collector.parse import event_from_dict, pod_from_dict

__all__ = ["KubeFetcher", "connect", "event_from_dict", "pod_from_dict"]
