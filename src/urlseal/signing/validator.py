"""
Signed URL verification.

``verify`` checks, in order and stopping at the first failure:

1. the signature parameter is present (``SignatureNotFoundError``)
2. the timeout parameter, when present, is not in the past
   (``SignatureExpiredError``)
3. the signature is not empty (``SignatureInvalidError``, reason ``empty``)
4. the signature matches the one recomputed over the URL without its
   signature parameter (``SignatureInvalidError``, reason ``mismatch``)

A URL without a timeout parameter never expires.
"""

from __future__ import annotations

from ..core import diagnostics
from ..core.algorithms import constant_time_equals
from ..core.clock import Clock, system_clock
from ..core.errors import (
    SignatureExpiredError,
    SignatureInvalidError,
    SignatureNotFoundError,
    SignatureValidationError,
)
from ..url.components import parse_url
from ..url.query import get_value, parse_query, without_keys
from .config import HashConfiguration
from .generator import compute_signature


class Validator:
    """Verify URLs produced by :class:`Builder` with the same configuration."""

    def __init__(self, config: HashConfiguration, *, clock: Clock | None = None) -> None:
        self._config = config
        self._clock = clock or system_clock

    @property
    def config(self) -> HashConfiguration:
        return self._config

    def is_valid(self, url: str) -> bool:
        """``verify`` as a boolean.

        Only signature validation failures map to ``False``; malformed URLs
        and configuration problems still raise.
        """
        try:
            return self.verify(url)
        except SignatureValidationError:
            return False

    def verify(self, url: str) -> bool:
        """Return ``True`` or raise the first failing check."""
        config = self._config
        components = parse_url(url)
        pairs = parse_query(components.query)

        present, signature = get_value(pairs, config.signature_key)
        if not present:
            diagnostics.debug(
                "signature", "signature not found", host=components.host
            )
            raise SignatureNotFoundError(components.query)

        has_timeout, raw_timeout = get_value(pairs, config.timeout_key)
        if has_timeout:
            now = self._clock()
            try:
                expires: int | None = int(raw_timeout or "")
            except ValueError:
                expires = None
            if expires is None or expires < now:
                diagnostics.debug(
                    "signature",
                    "signature expired",
                    host=components.host,
                    expires=raw_timeout,
                    now=now,
                )
                raise SignatureExpiredError(str(raw_timeout), now)

        given = signature or ""
        if not given:
            raise SignatureInvalidError.empty_signature(given)

        unsigned = components.replace(
            query=without_keys(components.query, config.signature_key)
        )
        expected = compute_signature(self, unsigned)
        if not constant_time_equals(expected, given):
            diagnostics.warn(
                "signature",
                "signature mismatch",
                host=components.host,
                path=components.path,
            )
            raise SignatureInvalidError.does_not_match(given, expected)
        return True
