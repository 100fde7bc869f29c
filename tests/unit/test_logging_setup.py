"""Unit tests for logging_setup.py"""

import logging

import pytest

from mdsite.logging_setup import LOG_LEVEL_ENV, configure_logging


@pytest.fixture(name="logger", autouse=True)
def logger_fixture():
    """Restore the mdsite logger to its pre-test state."""
    logger = logging.getLogger("mdsite")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers = [h for h in logger.handlers if not getattr(h, "_mdsite_managed", False)]
    yield logger
    logger.handlers, logger.level, logger.propagate = saved[0], saved[1], saved[2]


def _managed(logger):
    return [h for h in logger.handlers if getattr(h, "_mdsite_managed", False)]


def test_configure_logging_attaches_one_handler(logger):
    """Repeated calls keep a single managed Rich handler."""
    configure_logging()
    configure_logging()
    assert len(_managed(logger)) == 1
    assert logger.propagate is False


def test_configure_logging_defaults_to_info(logger):
    configure_logging()
    assert logger.level == logging.INFO


def test_configure_logging_verbose_is_debug(logger):
    configure_logging(verbose=True)
    assert logger.level == logging.DEBUG


def test_configure_logging_level_from_env(logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
    configure_logging()
    assert logger.level == logging.WARNING


def test_configure_logging_verbose_beats_env(logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
    configure_logging(verbose=True)
    assert logger.level == logging.DEBUG


def test_configure_logging_unknown_env_level_falls_back_to_info(logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
    configure_logging()
    assert logger.level == logging.INFO
