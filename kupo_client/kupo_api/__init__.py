"""HTTP client wrappers for the Kupo indexer API."""

from .client import KupoClient
from .errors import (
    DecodeError,
    KupoApiError,
    StatusError,
    TransportError,
    ValidationError,
)
from .models import (
    NOT_MODIFIED,
    DatumResponse,
    Match,
    MetadataItem,
    NotModified,
    Pattern,
    Point,
    ScriptResponse,
    Value,
)

__all__ = [
    "KupoClient",
    "KupoApiError",
    "TransportError",
    "StatusError",
    "DecodeError",
    "ValidationError",
    "NOT_MODIFIED",
    "NotModified",
    "Match",
    "Value",
    "Point",
    "MetadataItem",
    "Pattern",
    "ScriptResponse",
    "DatumResponse",
]
