"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest

from kubets.observability.logging import get_logger, setup_logging


class TestSetupLogging:
    def test_json_lines_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("info", "json")
        get_logger("test").info("hello", pod="web-1")
        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip())
        assert record["event"] == "hello"
        assert record["component"] == "test"
        assert record["pod"] == "web-1"
        assert record["level"] == "info"
        assert "ts" in record

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("warning", "json")
        get_logger("test").info("quiet")
        assert capsys.readouterr().err == ""

    def test_console_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("debug", "console")
        get_logger("test").debug("readable")
        assert "readable" in capsys.readouterr().err


class TestLibraryLoggers:
    @pytest.mark.parametrize("level", ["info", "warning", "error"])
    def test_library_warnings_are_silenced(self, level: str) -> None:
        setup_logging(level, "json")
        assert not logging.getLogger("kubernetes_asyncio.config.kube_config").isEnabledFor(logging.WARNING)
        assert not logging.getLogger("aiohttp.client").isEnabledFor(logging.ERROR)

    def test_debug_lets_library_logs_through(self) -> None:
        setup_logging("debug", "json")
        assert logging.getLogger("kubernetes_asyncio.config.kube_config").isEnabledFor(logging.WARNING)
