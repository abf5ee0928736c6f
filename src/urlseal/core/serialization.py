"""
JSON serialization of fingerprint gists.

The gist is the exact HMAC input for a fingerprint, so its byte layout is
part of the fingerprint format: compact separators, keys in insertion order
(never sorted), slashes and non-ASCII characters left unescaped. orjson
produces exactly that by default.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import orjson

from .errors import ErrorCategory, ErrorSeverity, UrlSealError


@dataclass(frozen=True)
class SerializedView:
    """Serialized bytes with a text accessor."""

    data: bytes

    @property
    def view(self) -> memoryview:
        return memoryview(self.data)

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")

    def __bytes__(self) -> bytes:
        return self.data


def serialize_mapping_to_json_bytes(payload: Mapping[str, Any]) -> SerializedView:
    """Serialize ``payload`` preserving key order.

    Only plain JSON types are accepted; anything else is a programming error.
    """
    try:
        data = orjson.dumps(dict(payload))
    except TypeError as e:
        raise UrlSealError(
            "Serialization failed",
            category=ErrorCategory.SERIALIZATION,
            severity=ErrorSeverity.HIGH,
            cause=e,
        ) from e
    return SerializedView(data=data)


def serialize_gist(parts: Mapping[str, str | int | None]) -> str:
    """Return the canonical gist string for resolved URL parts."""
    return serialize_mapping_to_json_bytes(parts).text
