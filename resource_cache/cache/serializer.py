"""
resource-cache — Payload Serializer

Values are stored as compact UTF-8 JSON text:
    {"foo": "bar"} -> '{"foo":"bar"}'

Supported domain: dict (string keys), list, str, int, finite float, bool, None.
Key order is preserved, so encoding is deterministic for a given value.
"""

from __future__ import annotations

import json
from typing import Any

from ..errors import DeserializationError, SerializationError


def _check_domain(value: Any, ancestors: set[int]) -> None:
    """
    Reject containers json.dumps would accept lossily.

    json.dumps turns tuples into lists and non-string keys into strings, so
    neither would survive a round trip.
    """
    if isinstance(value, tuple):
        raise TypeError("tuples are not supported, use a list")
    if not isinstance(value, (dict, list)):
        return

    if id(value) in ancestors:
        raise ValueError("Circular reference detected")
    ancestors.add(id(value))

    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"keys must be str, not {type(key).__name__}")
            _check_domain(item, ancestors)
    else:
        for item in value:
            _check_domain(item, ancestors)

    ancestors.discard(id(value))


def encode(value: Any) -> str:
    """
    Serialize a value into a storage payload.

    Raises:
        SerializationError: Unsupported type or dict key, tuple, structural cycle, NaN or Infinity
    """
    try:
        _check_domain(value, set())
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(
            f"Failed to encode value of type {type(value).__name__}: {e}",
            details={"value_type": type(value).__name__, "error": str(e)},
        ) from e


def decode(payload: str | bytes | None) -> Any | None:
    """
    Deserialize a storage payload. Returns None for an absent or empty payload.

    Raises:
        DeserializationError: Payload is not valid UTF-8 JSON
    """
    if not payload:
        return None

    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        return json.loads(payload)
    except (ValueError, UnicodeDecodeError) as e:
        preview = payload[:100]
        raise DeserializationError(
            f"Failed to decode cached payload: {e}",
            details={"payload_preview": preview if isinstance(preview, str) else repr(preview), "error": str(e)},
        ) from e
