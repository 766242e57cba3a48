"""Pytest config shared by unit and integration tests."""

from __future__ import annotations

import pytest

from kubets.observability.logging import setup_logging


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    """Reset structlog before every test so loggers never write to a stale capture stream."""
    setup_logging("error")
