"""
Resolve the URL parts that make up a fingerprint gist.

All seven parts are always present, in a fixed order. An ignored part is
``None``, except ``path`` which is ``""`` because a URL always has a path.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..core.errors import InvalidUrlError
from ..url.components import UrlComponents
from ..url.query import canonicalize_query
from .options import FingerprintOptions

GIST_PARTS = ("scheme", "userinfo", "host", "port", "path", "query", "fragment")


def resolve_parts(
    components: UrlComponents,
    options: FingerprintOptions,
    ignored_query_params: Iterable[object] = (),
    *,
    url: str = "",
) -> dict[str, str | int | None]:
    """Map each gist part to its value or placeholder.

    Raises:
        InvalidUrlError: the URL has no scheme and the scheme is not ignored.
    """
    if components.scheme is None and not options.ignore_scheme:
        raise InvalidUrlError.scheme_is_missing(url)

    resolved: dict[str, str | int | None] = {}
    for part in GIST_PARTS:
        if options.ignores(part):
            resolved[part] = "" if part == "path" else None
        elif part == "query":
            resolved[part] = canonicalize_query(
                components.query, ignored_query_params
            )
        else:
            resolved[part] = getattr(components, part)
    return resolved
