"""Shared fixtures for the trackball tests."""

from __future__ import annotations

import logging

import pytest

from input_gestures import ManualFrameScheduler
from logging_config import LOGGER_NAMES
from projection import BoundingBox


@pytest.fixture
def box() -> BoundingBox:
    return BoundingBox.from_size(400, 400)


@pytest.fixture
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture
def draws() -> list:
    """Collects every orientation handed to the draw callback."""
    return []


@pytest.fixture(autouse=True)
def _clear_logging_handlers():
    yield
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
