"""URL parsing, rebuilding and query canonicalization."""

from .components import UrlComponents, build_url, parse_url
from .query import QueryPair, canonicalize_query, parse_query

__all__ = [
    "UrlComponents",
    "QueryPair",
    "parse_url",
    "build_url",
    "parse_query",
    "canonicalize_query",
]
