"""Unit tests for environment-driven configuration.

Tests cover:
- Log level, transcript and directory settings
- configure_logging() applying the level to the lantern loggers
"""

import logging
from pathlib import Path

import pytest

from lantern.config import (
    configure_logging,
    get_log_level,
    get_logs_dir,
    get_worlds_dir,
    session_logs_enabled,
)


class TestSettings:
    """Tests for the individual settings."""

    def test_log_level_default(self, monkeypatch) -> None:
        """The log level defaults to WARNING."""
        monkeypatch.delenv("LANTERN_LOG_LEVEL", raising=False)

        assert get_log_level() == "WARNING"

    def test_log_level_override(self, monkeypatch) -> None:
        """The level is upper-cased."""
        monkeypatch.setenv("LANTERN_LOG_LEVEL", "debug")

        assert get_log_level() == "DEBUG"

    @pytest.mark.parametrize("value,expected", [("1", True), ("Yes", True), ("on", True), ("false", False), ("", False)])
    def test_session_logs_flag(self, monkeypatch, value, expected) -> None:
        """Common truthy spellings enable transcripts."""
        monkeypatch.setenv("LANTERN_SESSION_LOGS", value)

        assert session_logs_enabled() is expected

    def test_directories(self, monkeypatch, tmp_path) -> None:
        """Directories can be moved with environment variables."""
        monkeypatch.setenv("LANTERN_LOGS_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("LANTERN_WORLDS_DIR", str(tmp_path / "worlds"))

        assert get_logs_dir() == tmp_path / "logs"
        assert get_worlds_dir() == tmp_path / "worlds"

    def test_default_worlds_dir(self, monkeypatch) -> None:
        """By default worlds live under the project root."""
        monkeypatch.delenv("LANTERN_WORLDS_DIR", raising=False)

        assert get_worlds_dir().name == "worlds"
        assert isinstance(get_worlds_dir(), Path)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.fixture(autouse=True)
    def restore_level(self):
        logger = logging.getLogger("lantern")
        level = logger.level
        yield
        logger.setLevel(level)

    def test_explicit_level(self) -> None:
        """An explicit level wins over the environment."""
        configure_logging("info")

        assert logging.getLogger("lantern").level == logging.INFO

    def test_level_from_environment(self, monkeypatch) -> None:
        """Without an argument the environment decides."""
        monkeypatch.setenv("LANTERN_LOG_LEVEL", "ERROR")

        configure_logging()

        assert logging.getLogger("lantern").level == logging.ERROR

    def test_unknown_level_falls_back(self) -> None:
        """Unknown level names fall back to WARNING."""
        configure_logging("chatty")

        assert logging.getLogger("lantern").level == logging.WARNING
