"""Tests for structlog configuration."""

import structlog

from stockledger.config import Settings, configure_logging, get_settings
from stockledger.config.logging import app_context_processor


class TestAppContext:
    def test_stamps_app_fields(self):
        add_context = app_context_processor(Settings(environment="staging"))
        event = add_context(None, "info", {"event": "stock_checked"})
        assert event["app"] == "Stock Ledger"
        assert event["version"] == "1.0.0"
        assert event["environment"] == "staging"

    def test_keeps_explicit_values(self):
        add_context = app_context_processor(Settings())
        event = add_context(None, "info", {"event": "x", "environment": "override"})
        assert event["environment"] == "override"


class TestConfigureLogging:
    def test_second_call_is_ignored(self):
        configure_logging()
        before = structlog.get_config()["processors"]
        configure_logging(Settings(environment="production"))
        assert structlog.get_config()["processors"] == before

    def test_production_renders_json(self):
        try:
            configure_logging(Settings(environment="production"), force=True)
            processors = structlog.get_config()["processors"]
            assert isinstance(processors[-1], structlog.processors.JSONRenderer)
            assert structlog.contextvars.merge_contextvars in processors
        finally:
            configure_logging(get_settings(), force=True)

    def test_development_renders_console(self):
        configure_logging(Settings(environment="development"), force=True)
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
