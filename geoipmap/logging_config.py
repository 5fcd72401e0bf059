"""Logging setup driven by ObservabilityConfig.

Adapters log through ``logging.getLogger(__name__)`` and pass context via
``extra={...}``. The structured formatter folds that context into a
single JSON line; the plain formatter ignores it.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .config import ObservabilityConfig, get_config

# Attributes present on every LogRecord; anything else came from ``extra``
_RESERVED = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Install a stream handler on the ``geoipmap`` logger.

    Calling this twice replaces the previous handler instead of stacking.

    Args:
        config: Optional configuration override.

    Returns:
        The configured package logger.
    """
    config = config or get_config().observability
    logger = logging.getLogger("geoipmap")

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if config.structured:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))
    logger.addHandler(handler)
    logger.setLevel(config.level.upper())
    return logger
