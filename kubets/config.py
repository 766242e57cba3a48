"""Configuration loading from environment variables."""

from __future__ import annotations

import os
import re

from kubets.models.config import ClusterConfig, EngineConfig, LogConfig, TriageConfig

_NAMESPACE_RE = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")

# Diagnoses never surface more than this many events.
MAX_EVENT_LIMIT = 5


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBETS_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    raw = _env(key, str(default))
    try:
        val = int(raw)
    except ValueError as exc:
        raise ValueError(f"KUBETS_{key} must be an integer, got: {raw!r}") from exc
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_namespace(value: str) -> str:
    if not _NAMESPACE_RE.match(value):
        raise ValueError(f"Invalid default namespace: {value!r}")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    valid = {"json", "console"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> TriageConfig:
    """Load configuration from KUBETS_* environment variables."""
    return TriageConfig(
        cluster=ClusterConfig(
            kube_context=_env("KUBE_CONTEXT", ""),
            request_timeout=_env_int("REQUEST_TIMEOUT", 30, min_val=1, max_val=300),
            default_namespace=_validate_namespace(_env("DEFAULT_NAMESPACE", "default")),
        ),
        engine=EngineConfig(
            event_limit=_env_int("EVENT_LIMIT", MAX_EVENT_LIMIT, min_val=1, max_val=MAX_EVENT_LIMIT),
            fleet_workers=_env_int("FLEET_WORKERS", 1, min_val=1, max_val=32),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
