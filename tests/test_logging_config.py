"""Tests for the script logging setup."""

from __future__ import annotations

import logging

import pytest

from calplt.logging_config import LOGGER_NAME, setup_logging


@pytest.fixture
def calplt_logger():
    logger = logging.getLogger(LOGGER_NAME)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_level_names_are_accepted(calplt_logger):
    logger = setup_logging("debug")
    assert logger is calplt_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_unknown_level_name_raises(calplt_logger):
    with pytest.raises(ValueError):
        setup_logging("chatty")


def test_repeat_calls_replace_handlers_and_write_file(calplt_logger, tmp_path):
    log_file = tmp_path / "calplt.log"
    setup_logging(logging.INFO)
    logger = setup_logging(logging.INFO, log_file=str(log_file))
    assert len(logger.handlers) == 2

    logging.getLogger("calplt.core.visual").info("refreshed")
    for handler in logger.handlers:
        handler.flush()
    assert "refreshed" in log_file.read_text(encoding="utf-8")
