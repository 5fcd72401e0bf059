"""Tests for logging setup."""

import json
import logging

from geoipmap.config import ObservabilityConfig
from geoipmap.logging_config import JSONFormatter, configure_logging


def test_json_formatter_includes_extra():
    record = logging.LogRecord(
        "geoipmap.adapters", logging.INFO, __file__, 1, "Subjects located", None, None
    )
    record.requested = 3

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Subjects located"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "geoipmap.adapters"
    assert payload["requested"] == 3
    assert "msg" not in payload


def test_configure_logging_replaces_handler():
    configure_logging(ObservabilityConfig(level="debug"))
    logger = configure_logging(ObservabilityConfig(level="warning", structured=True))

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)
    assert logger.level == logging.WARNING
