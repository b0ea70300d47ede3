"""
Configuration helpers for the Kupo client.

This module centralizes base URL selection, the overall request timeout and
logging settings. Values come from the environment with safe fallbacks; the
resulting config object is immutable and owned by each client instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Default connection settings
DEFAULT_BASE_URL = os.getenv("KUPO_URL", "http://localhost:1442")
FALLBACK_TIMEOUT = 300.0


def _load_timeout() -> float:
    raw_timeout = os.getenv("KUPO_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            return FALLBACK_TIMEOUT
        if timeout <= 0:
            return FALLBACK_TIMEOUT
        return timeout
    return FALLBACK_TIMEOUT


DEFAULT_TIMEOUT = _load_timeout()
LOG_LEVEL = os.getenv("KUPO_CLIENT_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("KUPO_CLIENT_LOG_FORMAT", "json")  # json or plain


@dataclass(frozen=True, slots=True)
class KupoConfig:
    """Runtime configuration for Kupo access."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT


default_config = KupoConfig()
