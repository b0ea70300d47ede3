"""Exceptions raised by the Kupo API client."""

from __future__ import annotations

from typing import Optional


class KupoApiError(Exception):
    """Base exception for Kupo API errors."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(KupoApiError):
    """Raised when the request cannot be built or the indexer cannot be reached."""


class StatusError(KupoApiError):
    """Raised when the indexer answers with an unexpected HTTP status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message, status_code=status_code)


class DecodeError(KupoApiError):
    """Raised when the body is not JSON of the expected shape, or hex decoding fails."""


class ValidationError(KupoApiError):
    """Raised when a decoded response is missing a required field."""

    def __init__(self, message: str, *, field: str) -> None:
        super().__init__(message)
        self.field = field
