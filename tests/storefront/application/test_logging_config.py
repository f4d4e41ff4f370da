"""Tests for environment-driven logging configuration."""

import logging
import logging.handlers

import pytest
from storefront.utils.logging import get_log_level, setup_stdlib_logging, wants_json


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestLevel:
    @pytest.mark.parametrize(
        "env,level",
        [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("qa", "INFO")],
    )
    def test_derived_from_protean_env(self, monkeypatch, env, level):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", env)
        assert get_log_level() == level

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"


class TestFormat:
    def test_json_in_production(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert wants_json() is True

    def test_console_in_development(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "development")
        assert wants_json() is False

    def test_format_override(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "development")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        assert wants_json() is True


class TestHandlers:
    def test_console_only_without_log_dir(self, monkeypatch, restore_root_logger):
        monkeypatch.delenv("LOG_DIR", raising=False)
        setup_stdlib_logging(level="INFO")

        assert [type(h) for h in restore_root_logger.handlers] == [logging.StreamHandler]
        assert logging.getLogger("protean").level == logging.WARNING

    def test_rotating_file_under_log_dir(self, tmp_path, restore_root_logger):
        setup_stdlib_logging(level="INFO", log_dir=str(tmp_path / "logs"))

        file_handlers = [
            h for h in restore_root_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == str(tmp_path / "logs" / "storefront.log")
        file_handlers[0].close()
