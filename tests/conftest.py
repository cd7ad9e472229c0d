"""
tests/conftest.py

Shared fixtures.

The `logger` fixture is a structlog bound logger whose records land in the
`log_capture` fixture instead of being printed.  Field trees are realized by
the same processor used in production, so assertions see plain dicts.
"""
from __future__ import annotations

import logging
from typing import Any

import pytest
import structlog
from structlog.testing import LogCapture

from structhttplog.tree import render_field_trees


def capture_logger(cap: LogCapture, level: int = logging.DEBUG) -> Any:
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[render_field_trees, cap],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


@pytest.fixture()
def log_capture() -> LogCapture:
    return LogCapture()


@pytest.fixture()
def logger(log_capture: LogCapture) -> Any:
    return capture_logger(log_capture)


@pytest.fixture()
def error_only_logger(log_capture: LogCapture) -> Any:
    """Logger that drops everything below ERROR before any processor runs."""
    return capture_logger(log_capture, logging.ERROR)
