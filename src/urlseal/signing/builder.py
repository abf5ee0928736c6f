"""
URL signing.

``Builder.sign`` runs: parse URL, strip any existing signature and timeout
parameters, inject the timeout (optional), compute the signature over the
selected components, append the signature as the last query parameter and
rebuild the URL. Re-signing an already signed URL therefore replaces the old
signature instead of nesting it. All other query parameters are kept
verbatim, in their original order and encoding.
"""

from __future__ import annotations

from ..core.clock import Clock, system_clock
from ..url.components import build_url, parse_url
from ..url.query import append_pair, without_keys
from .config import HashConfiguration
from .generator import compute_signature
from .timeout import TimeoutInput, resolve_timeout
from .validator import Validator


class Builder:
    """Sign URLs with an HMAC and an optional expiry."""

    def __init__(self, config: HashConfiguration, *, clock: Clock | None = None) -> None:
        self._config = config
        self._clock = clock or system_clock

    @property
    def config(self) -> HashConfiguration:
        return self._config

    def sign(self, url: str, timeout: TimeoutInput | None = None) -> str:
        """Return ``url`` with a signature (and expiry) in its query string.

        Args:
            url: absolute or relative URL to sign
            timeout: unix timestamp, ``datetime``/``date`` or date expression
                after which the signature is no longer valid

        Raises:
            InvalidUrlError: the URL cannot be parsed
            InvalidTimeoutError: the timeout is unparsable, of an unsupported
                type, or in the past
        """
        config = self._config
        components = parse_url(url)

        query = without_keys(
            components.query, config.signature_key, config.timeout_key
        )
        if timeout is not None:
            expires = resolve_timeout(timeout, self._clock)
            query = append_pair(query, config.timeout_key, str(expires))

        components = components.replace(query=query)
        signature = compute_signature(self, components)
        components = components.replace(
            query=append_pair(components.query, config.signature_key, signature)
        )
        return build_url(components)

    sign_url = sign

    def create_validator(self) -> Validator:
        """A validator sharing this builder's configuration instance and clock."""
        return Validator(self._config, clock=self._clock)
