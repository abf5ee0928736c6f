"""
Query string parsing and canonicalization.

A query is kept as the raw string from the URL and handled one ``&``
separated segment at a time. Editing (removing the signature or timeout
parameter, appending a new one) works on raw segments, so every other
parameter is carried over byte for byte. Duplicate keys keep their relative
order; a bare key (``?b``) has the value ``None`` when parsed.

The canonical form, used as hash input, serializes every segment as
``key=value`` (bare keys become ``key=``, so ``?b`` and ``?b=`` are
identical), sorts the serialized strings and joins them with ``&``. Sorting
whole ``key=value`` strings orders duplicate keys by value as well, so the
result does not depend on parameter order.

Keys and values are percent-normalized, never decoded: escapes of
unreserved characters are unescaped, all other escapes get uppercase hex and
characters that cannot appear literally in a query are escaped as UTF-8.
``+`` and ``%2B`` therefore stay distinct, as do escapes of bytes that are
not valid UTF-8. The canonical string is pure ASCII, so code-point order
equals byte order.
"""

from __future__ import annotations

import re
import string
from collections.abc import Iterable
from urllib.parse import quote, unquote

QueryPair = tuple[str, "str | None"]

# Kept literal in appended pairs; "&", "=", "+" and "#" are always escaped
_COMPONENT_SAFE = "!$'()*,;:@/?[]~"
# Kept literal when normalizing raw segments
_LITERAL_SAFE = _COMPONENT_SAFE + "+="

_UNRESERVED = frozenset(string.ascii_letters + string.digits + "-._~")
_ESCAPE = re.compile(r"%([0-9A-Fa-f]{2})")

_ARRAY_KEY = re.compile(r"^(\w+)(\[.*\])?$")


def encode_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def normalize_component(raw: str) -> str:
    """Percent-normalize a raw key or value without decoding it.

    A ``%`` that does not start a valid escape is itself escaped as ``%25``.
    """
    normalized = []
    position = 0
    for match in _ESCAPE.finditer(raw):
        normalized.append(quote(raw[position : match.start()], safe=_LITERAL_SAFE))
        char = chr(int(match.group(1), 16))
        normalized.append(char if char in _UNRESERVED else match.group(0).upper())
        position = match.end()
    normalized.append(quote(raw[position:], safe=_LITERAL_SAFE))
    return "".join(normalized)


def split_query(query: str | None) -> list[str]:
    """The non-empty raw ``&`` separated segments of ``query``."""
    if not query:
        return []
    return [segment for segment in query.split("&") if segment]


def segment_key(segment: str) -> str:
    """Decoded key of a raw segment, for matching only."""
    return unquote(segment.partition("=")[0])


def parse_query(query: str | None) -> list[QueryPair]:
    """Split a raw query string into decoded ``(key, value)`` pairs."""
    pairs: list[QueryPair] = []
    for segment in split_query(query):
        key, eq, value = segment.partition("=")
        pairs.append((unquote(key), unquote(value) if eq else None))
    return pairs


def append_pair(query: str | None, key: str, value: str) -> str:
    """Append ``key=value`` as the last parameter of ``query``."""
    pair = f"{encode_component(key)}={encode_component(value)}"
    if not query:
        return pair
    return f"{query}&{pair}"


def without_keys(query: str | None, *keys: str) -> str | None:
    """Drop every segment whose key is one of ``keys``; ``None`` when empty.

    The remaining segments are kept verbatim and in order.
    """
    dropped = set(keys)
    kept = [s for s in split_query(query) if segment_key(s) not in dropped]
    return "&".join(kept) if kept else None


def get_value(pairs: Iterable[QueryPair], key: str) -> tuple[bool, str | None]:
    """Return ``(present, value)`` for the last occurrence of ``key``."""
    found = False
    result: str | None = None
    for k, v in pairs:
        if k == key:
            found = True
            result = v
    return found, result


def base_key(key: str) -> str:
    """Strip array notation: ``foo[]`` and ``foo[a][b]`` become ``foo``."""
    match = _ARRAY_KEY.match(key)
    return match.group(1) if match else key


def is_ignored(key: str, ignore: Iterable[object]) -> bool:
    """Case-sensitive match of ``key`` (without array suffix) against ``ignore``.

    Entries that are not strings never match.
    """
    name = base_key(key)
    return any(isinstance(entry, str) and entry == name for entry in ignore)


def canonicalize_query(
    query: str | None, ignore: Iterable[object] = ()
) -> str | None:
    """Return the canonical form of a raw query, or ``None`` when nothing remains."""
    ignore = tuple(ignore)
    serialized = []
    for segment in split_query(query):
        if ignore and is_ignored(segment_key(segment), ignore):
            continue
        key, _, value = segment.partition("=")
        serialized.append(f"{normalize_component(key)}={normalize_component(value)}")
    return "&".join(sorted(serialized)) or None
