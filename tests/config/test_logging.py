"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from clinch.config.logging import configure_logging
from tests.conftest import ExitFiveCommand


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("clinch").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("clinch").level == logging.WARNING

    def test_json_lines_to_stream(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("clinch.test").warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "clinch.test"
        assert "timestamp" in parsed

    @pytest.mark.asyncio
    async def test_lifecycle_debug_lines_structured(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        await ExitFiveCommand().validate_and_execute()
        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert lines[-1]["event"] == "Command ExitFiveCommand exited with 5"
        assert lines[-1]["logger"] == "clinch.domain.command"
        assert lines[-1]["level"] == "debug"

    def test_pluggy_debug_is_suppressed(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("pluggy").debug("hook noise")
        assert stream.getvalue() == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
