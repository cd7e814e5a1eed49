# tests/conftest.py

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging():
    """configure_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("adat").setLevel(logging.NOTSET)
    structlog.reset_defaults()
