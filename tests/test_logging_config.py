"""Tests for structured logging configuration."""

import logging

import structlog

from cli.logging_config import _redact_sensitive, setup_logging


class TestLoggingConfig:
    """Test structlog setup modes."""

    def test_console_mode(self):
        setup_logging(json_mode=False, level="DEBUG")
        structlog.get_logger().info("test message", key="value")

    def test_json_mode(self, capsys):
        setup_logging(json_mode=True, level="INFO")
        logging.getLogger("test_json").info("json test")
        assert "json test" in capsys.readouterr().err

    def test_level_filtering(self):
        setup_logging(json_mode=False, level="ERROR")
        assert logging.getLogger().level == logging.ERROR

    def test_default_level_is_warning(self):
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_single_root_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1


class TestRedaction:
    def test_api_key_redacted(self):
        event = _redact_sensitive(None, None, {"event": "backend", "key": "sk-ant-REDACTED"})
        assert event["key"] == "sk-ant-abcdefghij...REDACTED"

    def test_email_redacted(self):
        event = _redact_sensitive(None, None, {"event": "note from ada@example.com"})
        assert event["event"] == "note from REDACTED@email"

    def test_password_redacted(self):
        event = _redact_sensitive(None, None, {"event": "password=hunter2"})
        assert "hunter2" not in event["event"]

    def test_non_strings_untouched(self):
        event = _redact_sensitive(None, None, {"event": "x", "count": 3})
        assert event["count"] == 3
