"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ClusterConfig:
    """Kubernetes API access configuration."""

    kube_context: str = ""
    request_timeout: int = 30
    default_namespace: str = "default"


@dataclass
class EngineConfig:
    """Diagnosis engine configuration."""

    event_limit: int = 5
    fleet_workers: int = 1


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"
    format: str = "json"


@dataclass
class TriageConfig:
    """Top-level kubets configuration."""

    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    log: LogConfig = field(default_factory=LogConfig)
