from __future__ import annotations

import importlib
import logging

import pytest

import htmltex.config as config
import htmltex.logging_utils as logging_utils


@pytest.fixture
def fresh_logging(monkeypatch):
    root = logging.getLogger("htmltex")
    level = root.level
    monkeypatch.setattr(logging_utils, "_configured", False)
    yield monkeypatch
    monkeypatch.undo()
    importlib.reload(config)
    root.setLevel(level)


def test_env_log_level_applied(fresh_logging):
    fresh_logging.setenv("HTMLTEX_LOG_LEVEL", "debug")
    fresh_logging.setattr(logging_utils, "LOG_LEVEL", importlib.reload(config).LOG_LEVEL)
    logging_utils.get_logger("htmltex.test")
    assert logging.getLogger("htmltex").level == logging.DEBUG


def test_unknown_env_log_level_falls_back(fresh_logging, caplog):
    fresh_logging.setenv("HTMLTEX_LOG_LEVEL", "verbose")
    fresh_logging.setattr(logging_utils, "LOG_LEVEL", importlib.reload(config).LOG_LEVEL)
    log = logging_utils.get_logger("htmltex.test")
    assert log.getEffectiveLevel() == logging.WARNING
    assert "Unknown HTMLTEX_LOG_LEVEL 'VERBOSE'" in caplog.text
