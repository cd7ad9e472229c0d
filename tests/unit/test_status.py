"""
tests/unit/test_status.py

Unit tests for structhttplog.status.

Both mappings are pure functions, so every test is synchronous.

Coverage
--------
  - status_label(): one label per status class, "Unknown" outside them
  - status_level(): info below 400, warning for 4xx and missing status,
    error for 5xx
  - log_func(): returns the logger method for the tier
"""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from structhttplog.status import ERROR, INFO, WARNING, log_func, status_label, status_level


class TestStatusLabel:
    @pytest.mark.parametrize("status", [100, 200, 204, 299])
    def test_ok(self, status: int) -> None:
        assert status_label(status) == "OK"

    @pytest.mark.parametrize("status", [300, 302, 307, 399])
    def test_redirect(self, status: int) -> None:
        assert status_label(status) == "Redirect"

    @pytest.mark.parametrize("status", [400, 403, 404, 499])
    def test_client_error(self, status: int) -> None:
        assert status_label(status) == "Client Error"

    @pytest.mark.parametrize("status", [500, 502, 599, 600])
    def test_server_error(self, status: int) -> None:
        assert status_label(status) == "Server Error"

    @pytest.mark.parametrize("status", [0, -1, 42, 99])
    def test_unknown(self, status: int) -> None:
        assert status_label(status) == "Unknown"


class TestStatusLevel:
    @pytest.mark.parametrize("status", [200, 204, 302, 307])
    def test_info_below_400(self, status: int) -> None:
        assert status_level(status) == INFO

    @pytest.mark.parametrize("status", [400, 403, 404, 499])
    def test_warning_for_client_errors(self, status: int) -> None:
        assert status_level(status) == WARNING

    @pytest.mark.parametrize("status", [500, 502, 599])
    def test_error_for_server_errors(self, status: int) -> None:
        assert status_level(status) == ERROR

    @pytest.mark.parametrize("status", [0, -1])
    def test_missing_status_is_warning(self, status: int) -> None:
        assert status_level(status) == WARNING

    def test_zero_label_and_level_disagree(self) -> None:
        # Label is a summary, level is urgency: both are kept independently.
        assert status_label(0) == "Unknown"
        assert status_level(0) == WARNING


class TestLogFunc:
    def test_returns_matching_method(self) -> None:
        log = MagicMock()
        assert log_func(log, 200) is log.info
        assert log_func(log, 404) is log.warning
        assert log_func(log, 503) is log.error
        assert log_func(log, 0) is log.warning
