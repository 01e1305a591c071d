"""
Unit tests for structured logging helpers.
"""

import structlog
from structlog.testing import capture_logs

from shared.logging import bind_context, configure_logging, unbind_context
from shared.logging.structured_logger import add_app_context


class TestStructuredLogger:

    def test_app_context_added(self):
        event = add_app_context(None, "info", {"event": "request_started"})

        assert event["app"] == "finance-tracker"
        assert "environment" in event

    def test_app_context_does_not_override(self):
        event = add_app_context(None, "info", {"event": "x", "app": "worker"})

        assert event["app"] == "worker"

    def test_configure_logging_tags_service(self):
        configure_logging(log_level="warning", json_logs=False, service_name="Finance Tracker API")

        assert structlog.contextvars.get_contextvars()["service"] == "Finance Tracker API"
        unbind_context("service")

    def test_structlog_emits_events(self):
        with capture_logs() as logs:
            structlog.get_logger("finance").info("account_created", account_id="acc_1")

        assert logs == [{"event": "account_created", "account_id": "acc_1", "log_level": "info"}]

    def test_bind_and_unbind_context(self):
        bind_context(correlation_id="corr-1")
        assert structlog.contextvars.get_contextvars()["correlation_id"] == "corr-1"

        unbind_context("correlation_id")
        assert "correlation_id" not in structlog.contextvars.get_contextvars()
