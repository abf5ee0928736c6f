"""
HMAC algorithm registry and digest helpers.

Algorithm names are matched case-insensitively against what the running
``hashlib`` can feed into ``hmac``. Extendable-output digests (``shake_*``)
have no fixed size and are not usable as HMAC digests.
"""

from __future__ import annotations

import hashlib
import hmac
from functools import lru_cache

from . import diagnostics
from .errors import ConfigurationError, UnknownHashAlgorithmError


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


@lru_cache(maxsize=1)
def available_algorithms() -> tuple[str, ...]:
    """Return the sorted, lowercase names usable with ``hmac.new``."""
    names: set[str] = set()
    for name in hashlib.algorithms_available:
        lowered = name.lower()
        if lowered.startswith("shake"):
            continue
        try:
            hmac.new(b"", b"", lowered)
        except (ValueError, TypeError):
            continue
        names.add(lowered)
    return tuple(sorted(names))


def is_available(algorithm: str) -> bool:
    return algorithm.lower() in available_algorithms()


def ensure_algorithm(algorithm: str) -> str:
    """Validate an algorithm name at configuration time and normalize it."""
    if not isinstance(algorithm, str) or not is_available(algorithm):
        raise ConfigurationError.invalid_algorithm(
            str(algorithm), list(available_algorithms())
        )
    return algorithm.lower()


def compute_hmac(algorithm: str, message: str | bytes, key: str | bytes) -> str:
    """Return the lowercase hex HMAC of ``message`` under ``key``.

    Raises:
        UnknownHashAlgorithmError: the platform rejects ``algorithm``.
    """
    try:
        return hmac.new(_to_bytes(key), _to_bytes(message), algorithm.lower()).hexdigest()
    except (ValueError, TypeError) as exc:
        diagnostics.warn("crypto", "unknown hash algorithm", algorithm=algorithm)
        raise UnknownHashAlgorithmError(algorithm, cause=exc) from exc


def constant_time_equals(known: str | bytes, given: str | bytes) -> bool:
    """Compare two digests without leaking timing information."""
    return hmac.compare_digest(_to_bytes(known), _to_bytes(given))
