"""Logging setup for applications and scripts built on the Kupo client."""

from __future__ import annotations

import json
import logging
from typing import Optional

from kupo_client.config import KupoConfig, default_config

_EXTRA_KEYS = ("path", "status_code", "error")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def resolve_level(name: str) -> int:
    level = getattr(logging, name.upper(), None)
    if isinstance(level, int):
        return level
    return logging.INFO


def configure_logging(config: Optional[KupoConfig] = None) -> logging.Handler:
    """
    Install a stream handler on the root logger.

    Args:
        config: Source of the log level and format; defaults to the module config.

    Returns:
        The handler that was installed, so callers can remove it again.
    """
    config = config or default_config
    handler = logging.StreamHandler()
    if config.log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logging.basicConfig(level=resolve_level(config.log_level), handlers=[handler], force=True)
    return handler
