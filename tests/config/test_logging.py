"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from spacectl.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("spacectl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("spacectl").level == logging.WARNING

    def test_sqlalchemy_stays_quiet(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("sqlalchemy").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("spacectl.test").warning("json test", space="dev")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["space"] == "dev"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "spacectl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("spacectl.infrastructure.platform").debug("Target set: %s", "dev")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Target set: dev"
        assert parsed["level"] == "debug"

    def test_info_hidden_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("spacectl.services.space").info("space.deleted", space="dev")
        assert capfd.readouterr().err == ""
