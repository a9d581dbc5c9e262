"""Tests for logging configuration."""

import logging

import pytest

from fitness_tracker.app_logging import configure_logging


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("fitness_tracker")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_configure_logging_idempotent(clean_logger) -> None:
    configure_logging()
    first_count = len(clean_logger.handlers)

    configure_logging("DEBUG")
    second_count = len(clean_logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert clean_logger.level == logging.DEBUG
    assert clean_logger.propagate is False
