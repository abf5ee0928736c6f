"""
Fingerprint value object.

A fingerprint keeps its gist (the exact HMAC input) next to the digest so
that :meth:`FingerprintReader.compare` can recompute both digests with the
reader's own secret. Instances compare by identity; use the reader to
compare fingerprints.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson


@dataclass(frozen=True, eq=False)
class Fingerprint:
    gist: str
    hash_algo: str
    digest: str

    def __str__(self) -> str:
        return self.digest

    @property
    def parts(self) -> dict[str, Any]:
        """The URL parts that went into the gist."""
        parsed: dict[str, Any] = orjson.loads(self.gist)
        return parsed
