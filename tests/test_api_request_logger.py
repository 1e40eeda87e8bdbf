"""Tests for outbound request logging."""

from unittest.mock import patch

import pytest

from train_board_proxy.adapters.http.api_request_logger import (
    log_outbound_request,
    should_log_requests,
)


class TestShouldLogRequests:
    """Tests for should_log_requests function."""

    def test_when_env_not_set_then_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given TBP_LOG_REQUESTS not set, when checking, then returns False."""
        monkeypatch.delenv("TBP_LOG_REQUESTS", raising=False)

        assert should_log_requests() is False

    def test_when_env_set_to_true_capitalized_then_returns_true(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Given TBP_LOG_REQUESTS=True (capitalized), when checking, then returns True."""
        monkeypatch.setenv("TBP_LOG_REQUESTS", "True")

        assert should_log_requests() is True

    def test_when_env_set_to_other_value_then_returns_false(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Given TBP_LOG_REQUESTS=1, when checking, then returns False."""
        monkeypatch.setenv("TBP_LOG_REQUESTS", "1")

        assert should_log_requests() is False


class TestLogOutboundRequest:
    """Tests for log_outbound_request function."""

    @patch("train_board_proxy.adapters.http.api_request_logger.should_log_requests")
    @patch("train_board_proxy.adapters.http.api_request_logger.logger")
    def test_when_logging_disabled_then_does_not_log(
        self, mock_logger: object, mock_should_log: object
    ) -> None:
        """Given logging disabled, when logging a request, then nothing is logged."""
        mock_should_log.return_value = False

        log_outbound_request("GET", "https://www.ns.nl/", 1)

        mock_logger.info.assert_not_called()

    @patch("train_board_proxy.adapters.http.api_request_logger.should_log_requests")
    @patch("train_board_proxy.adapters.http.api_request_logger.logger")
    def test_when_logging_enabled_then_logs_method_url_and_attempt(
        self, mock_logger: object, mock_should_log: object
    ) -> None:
        """Given logging enabled, when logging a request, then method, URL and attempt appear."""
        mock_should_log.return_value = True

        log_outbound_request("GET", "https://www.ns.nl/", 2, headers={"User-Agent": "Test"})

        mock_logger.info.assert_called_once()
        message = mock_logger.info.call_args[0][0]
        assert "GET https://www.ns.nl/ (attempt 2)" in message
        assert "User-Agent" in message

    @patch("train_board_proxy.adapters.http.api_request_logger.should_log_requests")
    @patch("train_board_proxy.adapters.http.api_request_logger.logger")
    def test_when_logging_cookie_header_then_redacts_it(
        self, mock_logger: object, mock_should_log: object
    ) -> None:
        """Given a Cookie header, when logging, then its value is redacted."""
        mock_should_log.return_value = True

        log_outbound_request("GET", "https://www.ns.nl/", 1, headers={"Cookie": "session=abc"})

        message = mock_logger.info.call_args[0][0]
        assert "session=abc" not in message
        assert "***REDACTED***" in message
