"""
Typed records returned by the Kupo API client.

Each record is decoded once from a parsed JSON body and handed to the caller.
Decoders check field presence and JSON types explicitly: a wrong type or a
missing structural field raises DecodeError, while a missing field on the
validated shapes (metadata, scripts, datums) raises ValidationError.
"""

from __future__ import annotations

import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import DecodeError, ValidationError

Pattern = str


class NotModified(Enum):
    """Marker returned when Kupo answers 304 Not Modified."""

    NOT_MODIFIED = 304

    def __repr__(self) -> str:
        return "NOT_MODIFIED"


NOT_MODIFIED = NotModified.NOT_MODIFIED


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _expect_object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{where}: expected object, got {_json_type(value)}")
    return value


def _expect_array(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"{where}: expected array, got {_json_type(value)}")
    return value


def _int_field(obj: Dict[str, Any], key: str, where: str) -> int:
    value = obj.get(key)
    if value is None:
        raise DecodeError(f"{where}: missing field '{key}'")
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{where}.{key}: expected integer, got {_json_type(value)}")
    return value


def _str_field(obj: Dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    if value is None:
        raise DecodeError(f"{where}: missing field '{key}'")
    if not isinstance(value, str):
        raise DecodeError(f"{where}.{key}: expected string, got {_json_type(value)}")
    return value


def _optional_str_field(obj: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"{where}.{key}: expected string, got {_json_type(value)}")
    return value


def _required_str_field(obj: Dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    if value is None or value == "":
        raise ValidationError(f"{where}: missing required field '{key}'", field=key)
    if not isinstance(value, str):
        raise DecodeError(f"{where}.{key}: expected string, got {_json_type(value)}")
    return value


def decode_hex(value: str, where: str) -> bytes:
    """Decode a hex string from the wire, rejecting odd lengths and stray characters."""
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"{where}: invalid hex: {exc}") from exc


@dataclass(frozen=True, slots=True)
class Point:
    """A position on the chain: slot number plus block header hash."""

    slot_no: int
    header_hash: str

    @classmethod
    def from_json(cls, data: Any, where: str = "point") -> "Point":
        obj = _expect_object(data, where)
        return cls(
            slot_no=_int_field(obj, "slot_no", where),
            header_hash=_str_field(obj, "header_hash", where),
        )


@dataclass(frozen=True, slots=True)
class Value:
    """Lovelace amount plus native assets keyed by `policy_id.asset_name`."""

    coins: int
    assets: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any, where: str = "value") -> "Value":
        obj = _expect_object(data, where)
        raw_assets = obj.get("assets")
        assets: Dict[str, int] = {}
        if raw_assets is not None:
            for asset_id, quantity in _expect_object(raw_assets, f"{where}.assets").items():
                if isinstance(quantity, bool) or not isinstance(quantity, int):
                    raise DecodeError(
                        f"{where}.assets[{asset_id!r}]: expected integer, got {_json_type(quantity)}"
                    )
                assets[asset_id] = quantity
        return cls(coins=_int_field(obj, "coins", where), assets=assets)


@dataclass(frozen=True, slots=True)
class Match:
    """A transaction output matched by one of the indexer's patterns."""

    transaction_index: int
    transaction_id: str
    output_index: int
    address: str
    value: Value
    created_at: Point
    datum_hash: Optional[str] = None
    datum_type: Optional[str] = None
    script_hash: Optional[str] = None
    spent_at: Optional[Point] = None

    @property
    def is_spent(self) -> bool:
        return self.spent_at is not None

    @classmethod
    def from_json(cls, data: Any, where: str = "match") -> "Match":
        obj = _expect_object(data, where)
        if "value" not in obj or obj["value"] is None:
            raise DecodeError(f"{where}: missing field 'value'")
        if "created_at" not in obj or obj["created_at"] is None:
            raise DecodeError(f"{where}: missing field 'created_at'")
        spent_at = obj.get("spent_at")
        return cls(
            transaction_index=_int_field(obj, "transaction_index", where),
            transaction_id=_str_field(obj, "transaction_id", where),
            output_index=_int_field(obj, "output_index", where),
            address=_str_field(obj, "address", where),
            value=Value.from_json(obj["value"], f"{where}.value"),
            created_at=Point.from_json(obj["created_at"], f"{where}.created_at"),
            datum_hash=_optional_str_field(obj, "datum_hash", where),
            datum_type=_optional_str_field(obj, "datum_type", where),
            script_hash=_optional_str_field(obj, "script_hash", where),
            spent_at=None if spent_at is None else Point.from_json(spent_at, f"{where}.spent_at"),
        )


@dataclass(frozen=True, slots=True)
class MetadataItem:
    """Transaction metadata: content hash, raw CBOR bytes and Kupo's detailed schema."""

    hash: str
    raw: bytes
    schema: Any

    @property
    def raw_hex(self) -> str:
        return self.raw.hex()

    @classmethod
    def from_json(cls, data: Any, where: str = "metadata") -> "MetadataItem":
        obj = _expect_object(data, where)
        # raw is hex-decoded before any field is validated
        raw_hex = obj.get("raw")
        if raw_hex is not None and not isinstance(raw_hex, str):
            raise DecodeError(f"{where}.raw: expected string, got {_json_type(raw_hex)}")
        raw = decode_hex(raw_hex, f"{where}.raw") if raw_hex else b""
        item_hash = _required_str_field(obj, "hash", where)
        if not raw:
            raise ValidationError(f"{where}: missing required field 'raw'", field="raw")
        # a literal null schema is kept as an opaque document; only an absent key fails
        if "schema" not in obj:
            raise ValidationError(f"{where}: missing required field 'schema'", field="schema")
        return cls(hash=item_hash, raw=raw, schema=obj["schema"])


@dataclass(frozen=True, slots=True)
class ScriptResponse:
    """A script's language tag (`native`, `plutus:v1`, ...) and its hex-encoded bytes."""

    language: str
    script: str

    @property
    def script_bytes(self) -> bytes:
        return decode_hex(self.script, "script")

    @classmethod
    def from_json(cls, data: Any, where: str = "script") -> "ScriptResponse":
        obj = _expect_object(data, where)
        return cls(
            language=_required_str_field(obj, "language", where),
            script=_required_str_field(obj, "script", where),
        )


@dataclass(frozen=True, slots=True)
class DatumResponse:
    """A datum's hex-encoded CBOR bytes."""

    datum: str

    @property
    def datum_bytes(self) -> bytes:
        return decode_hex(self.datum, "datum")

    @classmethod
    def from_json(cls, data: Any, where: str = "datum") -> "DatumResponse":
        obj = _expect_object(data, where)
        return cls(datum=_required_str_field(obj, "datum", where))


def decode_matches(data: Any) -> List[Match]:
    items = _expect_array(data, "matches")
    return [Match.from_json(item, f"matches[{index}]") for index, item in enumerate(items)]


def decode_metadata(data: Any) -> List[MetadataItem]:
    items = _expect_array(data, "metadata")
    return [MetadataItem.from_json(item, f"metadata[{index}]") for index, item in enumerate(items)]


def decode_patterns(data: Any) -> List[Pattern]:
    items = _expect_array(data, "patterns")
    patterns: List[Pattern] = []
    for index, item in enumerate(items):
        if not isinstance(item, str):
            raise DecodeError(f"patterns[{index}]: expected string, got {_json_type(item)}")
        patterns.append(item)
    return patterns
