"""
Thin HTTP client for the Kupo chain indexer.

All methods are read-only GET requests against a fixed endpoint surface. Each
call is a single request/response round trip; failures are mapped to the
exceptions in `kupo_client.kupo_api.errors` and never retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

import httpx

from kupo_client.config import KupoConfig, default_config

from .errors import DecodeError, StatusError, TransportError, ValidationError
from .models import (
    NOT_MODIFIED,
    DatumResponse,
    Match,
    MetadataItem,
    NotModified,
    Pattern,
    ScriptResponse,
    decode_matches,
    decode_metadata,
    decode_patterns,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACCEPT_HEADERS = {"Accept": "application/json"}


def _normalize_url(url: str) -> str:
    return url.rstrip("/")


class KupoClient:
    """Async client for the Kupo HTTP API."""

    def __init__(
        self,
        config: KupoConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=_normalize_url(self.config.base_url), timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "KupoClient":
        return self

    async def __aexit__(self, *_exc_info: Any) -> None:
        await self.aclose()

    async def _get(
        self, path: str, *, action: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        try:
            client = await self._get_client()
        except httpx.InvalidURL as exc:
            raise TransportError(f"failed to create request: {exc}") from exc
        logger.debug("GET %s", path, extra={"path": path})
        try:
            return await asyncio.wait_for(
                client.get(path, params=params, headers=dict(ACCEPT_HEADERS)),
                timeout=self.config.timeout,
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise TransportError(f"failed to create request: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("Kupo unreachable for path %s", path, extra={"path": path, "error": str(exc)})
            raise TransportError(f"failed to {action}: {exc}") from exc
        except asyncio.TimeoutError as exc:
            logger.warning("Kupo request timed out for path %s", path, extra={"path": path})
            raise TransportError(
                f"failed to {action}: timed out after {self.config.timeout}s"
            ) from exc

    def _check_status(
        self, response: Any, path: str, *, action: str, allow_not_modified: bool = False
    ) -> bool:
        """Return True when the response is a 304 the caller should surface as NOT_MODIFIED."""
        status_code = response.status_code
        if status_code == 304 and allow_not_modified:
            logger.info("Kupo reported %s not modified", path, extra={"path": path, "status_code": 304})
            return True
        if status_code != 200:
            logger.warning(
                "Unexpected status %s for path %s",
                status_code,
                path,
                extra={"path": path, "status_code": status_code},
            )
            raise StatusError(f"failed to {action}: status code {status_code}", status_code=status_code)
        return False

    @staticmethod
    def _parse_json(response: Any, *, subject: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"failed to unmarshal {subject}: {exc}") from exc

    @staticmethod
    def _decode(data: Any, decoder: Callable[[Any], T], *, subject: str) -> T:
        try:
            return decoder(data)
        except ValidationError as exc:
            raise ValidationError(f"failed to validate {subject}: {exc}", field=exc.field) from exc
        except DecodeError as exc:
            raise DecodeError(f"failed to unmarshal {subject}: {exc}") from exc

    async def get_all_matches(self) -> List[Match]:
        """Fetch every match (spent and unspent) the indexer holds."""
        path = "/matches"
        response = await self._get(path, action="get all matches")
        self._check_status(response, path, action="get all matches")
        data = self._parse_json(response, subject="matches")
        return self._decode(data, decode_matches, subject="matches")

    async def get_matches(self, pattern: str) -> List[Match]:
        """
        Fetch matches for a pattern such as `addr1.../*` or `*/*`.

        The pattern is placed in the path as given; callers must pass a
        URL-safe pattern.
        """
        path = f"/matches/{pattern}"
        response = await self._get(path, action="get matches")
        self._check_status(response, path, action="get matches")
        data = self._parse_json(response, subject="matches")
        return self._decode(data, decode_matches, subject="matches")

    async def get_metadata(
        self, slot_no: int, transaction_id: str = ""
    ) -> Union[List[MetadataItem], NotModified]:
        """
        Fetch transaction metadata recorded at a slot.

        Args:
            slot_no: Slot of the block holding the transactions.
            transaction_id: Optional transaction id to narrow the result.

        Returns:
            One item per matching transaction, or NOT_MODIFIED on a 304. Any
            item failing hex decoding or validation fails the whole call.
        """
        path = f"/metadata/{slot_no}"
        params = {"transaction_id": transaction_id} if transaction_id else None
        response = await self._get(path, action="get metadata", params=params)
        if self._check_status(response, path, action="get metadata", allow_not_modified=True):
            return NOT_MODIFIED
        data = self._parse_json(response, subject="metadata")
        return self._decode(data, decode_metadata, subject="metadata")

    async def get_all_patterns(self) -> List[Pattern]:
        """Fetch every pattern the indexer is configured with."""
        path = "/patterns"
        response = await self._get(path, action="get patterns")
        self._check_status(response, path, action="get patterns")
        data = self._parse_json(response, subject="patterns")
        return self._decode(data, decode_patterns, subject="patterns")

    async def get_patterns(self, pattern: str) -> List[Pattern]:
        """Fetch the configured patterns that overlap with `pattern`."""
        path = f"/patterns/{pattern}"
        response = await self._get(path, action="get pattern")
        self._check_status(response, path, action="get pattern")
        data = self._parse_json(response, subject="pattern")
        return self._decode(data, decode_patterns, subject="pattern")

    async def get_script_by_hash(
        self, script_hash: str
    ) -> Union[ScriptResponse, None, NotModified]:
        """Fetch a script by hash; None when the indexer has never seen it."""
        path = f"/scripts/{script_hash}"
        response = await self._get(path, action="get script")
        if self._check_status(response, path, action="get script", allow_not_modified=True):
            return NOT_MODIFIED
        data = self._parse_json(response, subject="script response")
        if data is None:
            return None
        return self._decode(data, ScriptResponse.from_json, subject="script response")

    async def get_datum_by_hash(
        self, datum_hash: str
    ) -> Union[DatumResponse, None, NotModified]:
        """Fetch a datum by hash; None when the indexer has never seen it."""
        path = f"/datums/{datum_hash}"
        response = await self._get(path, action="get datum")
        if self._check_status(response, path, action="get datum", allow_not_modified=True):
            return NOT_MODIFIED
        data = self._parse_json(response, subject="datum")
        if data is None:
            return None
        return self._decode(data, DatumResponse.from_json, subject="datum response")
