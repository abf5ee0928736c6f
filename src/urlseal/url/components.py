"""
URL component extraction and reassembly on top of ``urllib.parse``.

``urlsplit`` reports a missing component as ``""``; here a component that
does not occur in the URL is ``None`` so that "no query" and "empty query"
(or "no host" and "empty host") stay distinguishable. ``path`` is the one
component that is never absent.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any
from urllib.parse import quote, urlsplit

from ..core.errors import InvalidUrlError

# Schemes whose URLs must carry a non-empty host
_HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})

# RFC 3986 pchar plus "/" and "%" (existing escapes are kept as is)
_PATH_SAFE = "/%:@!$&'()*+,;=~"
_FRAGMENT_SAFE = _PATH_SAFE + "?"


@dataclass(frozen=True)
class UrlComponents:
    """Parsed URL; ``None`` means the component is not present."""

    scheme: str | None = None
    userinfo: str | None = None
    host: str | None = None
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None

    def replace(self, **changes: Any) -> UrlComponents:
        return replace(self, **changes)


def _split_authority(netloc: str) -> tuple[str | None, str]:
    userinfo, at, hostport = netloc.rpartition("@")
    host = hostport
    if hostport.startswith("["):
        end = hostport.find("]")
        host = hostport[: end + 1] if end != -1 else hostport
    else:
        host = hostport.partition(":")[0]
    return (userinfo if at else None), host.lower()


def parse_url(url: str) -> UrlComponents:
    """Split ``url`` into its components.

    Raises:
        InvalidUrlError: the URL is rejected by the parser (bad port, broken
            IPv6 literal, missing host for a network scheme).
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise InvalidUrlError.syntax_error(url, e) from e

    # urlsplit strips leading whitespace and control characters
    head = url.lstrip("".join(chr(c) for c in range(33)))
    if parts.scheme:
        head = head[len(parts.scheme) + 1 :]
    before_fragment, hash_sign, _ = head.partition("#")
    has_authority = before_fragment.startswith("//")
    has_query = "?" in before_fragment

    userinfo: str | None = None
    host: str | None = None
    if has_authority:
        userinfo, host = _split_authority(parts.netloc)

    scheme = parts.scheme or None
    if scheme in _HOST_REQUIRED_SCHEMES and not host:
        raise InvalidUrlError(
            f"The uri `{url}` is invalid for the `{scheme}` scheme.",
            url=url,
        )

    return UrlComponents(
        scheme=scheme,
        userinfo=userinfo,
        host=host,
        port=port,
        path=quote(parts.path, safe=_PATH_SAFE),
        query=parts.query if has_query else None,
        fragment=quote(parts.fragment, safe=_FRAGMENT_SAFE) if hash_sign else None,
    )


def build_url(components: UrlComponents) -> str:
    """Reassemble components into a URL string.

    The authority (userinfo, host, port) is only written when a host is
    present; absent query and fragment produce no ``?`` or ``#``.
    """
    result = components.path
    if components.query is not None:
        result += "?" + components.query
    if components.fragment is not None:
        result += "#" + components.fragment

    scheme = f"{components.scheme}:" if components.scheme is not None else ""
    if components.host is None:
        return scheme + result

    authority = components.host
    if components.port is not None:
        authority += f":{components.port}"
    if components.userinfo is not None:
        authority = f"{components.userinfo}@{authority}"
    return f"{scheme}//{authority}{result}"
