"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def logs_root(tmp_path, monkeypatch):
    """Redirect log files under tmp_path with a fixed date stamp."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240106"),
    )
    return tmp_path


@pytest.fixture
def fresh_singletons(monkeypatch):
    """Reset logger singletons so each test builds its own wrappers."""
    for cls in (
        logger_module.Logger,
        logger_module.AppLogger,
        logger_module.UsageLogger,
    ):
        monkeypatch.setattr(cls, "_instance", None)


def _file_handlers(logger: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_builder_writes_dated_file_under_subdir(logs_root):
    built = (
        logger_module.LoggerBuilder()
        .name("ledger.batch-report")
        .subdir("batches")
        .prefix("stock_in")
        .level(logging.WARNING)
        .build()
    )

    assert built.level == logging.WARNING
    assert built.propagate is False
    handlers = _file_handlers(built)
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str(
        logs_root / "logs" / "batches" / "20240106_stock_in.log"
    )


def test_builder_adds_console_only_when_enabled(logs_root):
    quiet = logger_module.LoggerBuilder().name("ledger.quiet").build()
    loud = (
        logger_module.LoggerBuilder()
        .name("ledger.loud")
        .console(True)
        .build()
    )

    def _streams(logger):
        return [
            h
            for h in logger.handlers
            if type(h) is logging.StreamHandler
        ]

    assert _streams(quiet) == []
    assert len(_streams(loud)) == 1


def test_builder_reuses_configured_logger(logs_root):
    builder = logger_module.LoggerBuilder().name("ledger.reused")
    first = builder.build()
    second = builder.subdir("elsewhere").build()

    assert second is first
    assert len(_file_handlers(second)) == 1


def test_builder_uses_injected_factories(logs_root):
    fmt = logging.Formatter("%(message)s")
    file_factory = MagicMock(return_value=logging.NullHandler())

    built = (
        logger_module.LoggerBuilder()
        .name("ledger.injected")
        .formatter(lambda: fmt)
        .file_handler(file_factory)
        .build()
    )

    path, used_fmt = file_factory.call_args.args
    assert path.name == "20240106_app.log"
    assert used_fmt is fmt
    assert isinstance(built.handlers[0], logging.NullHandler)


def test_app_logger_delegates_every_level(monkeypatch, fresh_singletons):
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )

    app_logger = logger_module.get_app_logger()
    app_logger.info("balance computed")
    app_logger.warning("unknown partition")
    app_logger.error("transaction rolled back")
    app_logger.debug("scope opened")
    app_logger.critical("store unreachable")

    fake_logger.info.assert_called_with("balance computed")
    fake_logger.warning.assert_called_with("unknown partition")
    fake_logger.error.assert_called_with("transaction rolled back")
    fake_logger.debug.assert_called_with("scope opened")
    fake_logger.critical.assert_called_with("store unreachable")


def test_app_and_usage_loggers_are_separate_singletons(
    monkeypatch,
    fresh_singletons,
):
    built_names: list[str] = []

    def _fake_build(self):
        built_names.append(self._name)
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built_names == ["ledger.app", "ledger.usage"]
