"""
URL fingerprinting.

``capture`` trims the URL, parses it, resolves the seven gist parts
according to the reader's options, serializes them as a compact JSON object
(the gist) and HMACs the gist with the reader's secret.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..core.algorithms import compute_hmac, constant_time_equals
from ..core.errors import InvalidUrlError
from ..core.options import parse_config
from ..core.serialization import serialize_gist
from ..url.components import parse_url
from .fingerprint import Fingerprint
from .options import FingerprintOptions
from .selector import resolve_parts


class FingerprintReader:
    """Capture and compare URL fingerprints.

    Example:
        reader = FingerprintReader(secret="42", ignore_fragment=True)
        a = reader.capture("https://example.com/?b=2&a=1#top")
        b = reader.capture("https://example.com/?a=1&b=2")
        assert reader.compare(a, b)
    """

    def __init__(
        self,
        options: FingerprintOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        self._options = parse_config(FingerprintOptions, options, **kwargs)

    @property
    def options(self) -> FingerprintOptions:
        return self._options

    def capture(
        self, url: str, ignored_query_params: Iterable[object] = ()
    ) -> Fingerprint:
        """Fingerprint ``url``.

        Args:
            url: the URL; surrounding whitespace is ignored
            ignored_query_params: query keys left out of the fingerprint;
                ``foo`` also matches ``foo[]`` and ``foo[a][b]``

        Raises:
            InvalidUrlError: empty URL, syntax error, or missing scheme
            UnknownHashAlgorithmError: the algorithm vanished from the platform
        """
        url = url.strip()
        if not url:
            raise InvalidUrlError.is_empty()
        if isinstance(ignored_query_params, str):
            ignored_query_params = (ignored_query_params,)

        components = parse_url(url)
        parts = resolve_parts(
            components, self._options, tuple(ignored_query_params), url=url
        )
        gist = serialize_gist(parts)
        return Fingerprint(gist, self._options.hash_algo, self._digest(gist))

    def compare(self, known: Fingerprint, fingerprint: Fingerprint) -> bool:
        """True when both gists yield the same digest under this reader."""
        return constant_time_equals(
            self._digest(known.gist), self._digest(fingerprint.gist)
        )

    def _digest(self, gist: str) -> str:
        return compute_hmac(self._options.hash_algo, gist, self._options.secret)
