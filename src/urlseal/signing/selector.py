"""
Select the URL components that take part in a signature.

Excluded components are blanked (``None``; ``path`` becomes ``""``). The
query is replaced by its canonical form and dropped entirely when it is
empty, so a query-less URL never gains an orphaned ``?`` in the hash input.
A selected port or userinfo is kept in the authority even when the host is
excluded; the host is then written as ``""``.
"""

from __future__ import annotations

from typing import Any

from ..url.components import UrlComponents, build_url
from ..url.query import canonicalize_query
from .config import Component, HashConfiguration


def select_components(
    components: UrlComponents, config: HashConfiguration
) -> UrlComponents:
    def pick(flag: Component, value: Any) -> Any:
        return value if config.has_component(flag) else None

    query = None
    if config.has_component(Component.QUERY) and components.query:
        query = canonicalize_query(components.query)

    userinfo = pick(Component.USERINFO, components.userinfo)
    port = pick(Component.PORT, components.port)
    host = pick(Component.HOST, components.host)
    if host is None and (userinfo is not None or port is not None):
        host = ""

    return UrlComponents(
        scheme=pick(Component.SCHEME, components.scheme),
        userinfo=userinfo,
        host=host,
        port=port,
        path=components.path if config.has_component(Component.PATH) else "",
        query=query,
        fragment=pick(Component.FRAGMENT, components.fragment),
    )


def hash_input(components: UrlComponents, config: HashConfiguration) -> str:
    """The mini-URL that is fed into the HMAC."""
    return build_url(select_components(components, config))
