"""Tests for credential redaction in logs."""

from __future__ import annotations

import json
import logging

from weather_tool.log_setup import JsonConsoleFormatter
from weather_tool.redaction import REDACTED, sanitize_for_logging, sanitize_text


def test_sanitize_text_redacts_query_key() -> None:
    text = "GET https://vc.test/timeline/Minsk/2023-05-01?key=SECRET&unitGroup=metric"
    sanitized = sanitize_text(text)
    assert "SECRET" not in sanitized
    assert f"?key={REDACTED}&unitGroup=metric" in sanitized


def test_sanitize_text_redacts_key_value_pairs() -> None:
    assert sanitize_text("api_key=SECRET other=1") == f"api_key={REDACTED} other=1"


def test_sanitize_for_logging_redacts_nested_credentials() -> None:
    payload = {
        "default": "vc",
        "providers": {
            "vc": {"provider": "vc", "api_key": "SECRET", "base_url": "https://vc.test"},
            "blank": {"provider": "vc", "api_key": ""},
        },
    }
    sanitized = sanitize_for_logging(payload)
    assert sanitized["providers"]["vc"]["api_key"] == REDACTED
    assert sanitized["providers"]["vc"]["base_url"] == "https://vc.test"
    assert sanitized["providers"]["blank"]["api_key"] == ""
    assert payload["providers"]["vc"]["api_key"] == "SECRET"


def test_json_formatter_redacts_message() -> None:
    record = logging.LogRecord(
        name="weather_tool",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="request to %s failed",
        args=("https://vc.test/x?key=SECRET",),
        exc_info=None,
    )
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["level"] == "WARNING"
    assert event["logger"] == "weather_tool"
    assert "SECRET" not in event["message"]


def test_json_formatter_includes_redacted_context_fields() -> None:
    record = logging.LogRecord(
        name="weather_tool.providers.visualcrossing",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Visual Crossing returned HTTP %d",
        args=(503,),
        exc_info=None,
    )
    record.provider = "vc"
    record.status_code = 503
    record.config_path = "/tmp/weather.json?key=SECRET"

    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["message"] == "Visual Crossing returned HTTP 503"
    assert event["provider"] == "vc"
    assert event["status_code"] == 503
    assert "SECRET" not in event["config_path"]
    assert "command" not in event
