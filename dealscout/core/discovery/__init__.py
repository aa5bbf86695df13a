# dealscout/core/discovery/__init__.py
from .search import (
    ALLOWED_HOSTS,
    SEARCH_ENDPOINT,
    SEARCH_SUFFIX,
    DiscoveryRun,
    dedupe_urls,
    discover,
    fallback_urls,
    is_allowed_host,
    normalize_url,
    parse_result_links,
    resolve_result_href,
    search_phrase,
)

__all__ = [
    "ALLOWED_HOSTS",
    "SEARCH_ENDPOINT",
    "SEARCH_SUFFIX",
    "DiscoveryRun",
    "dedupe_urls",
    "discover",
    "fallback_urls",
    "is_allowed_host",
    "normalize_url",
    "parse_result_links",
    "resolve_result_href",
    "search_phrase",
]
