# dealscout/core/discovery/search.py
"""
Listing-page discovery via a public HTML search surface.

Per phrase: one search request, result anchors resolved to absolute URLs,
only allow-listed real-estate hosts kept. The URL set is run-wide and capped;
nothing here ranks results, first come is first kept.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from urllib.parse import parse_qs, quote, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from ..fetch import SEARCH_ACCEPT, HtmlFetcherError, HttpGet, fetch_html
from ..normalize.location import extract_location

logger = logging.getLogger(__name__)

SEARCH_ENDPOINT = "https://html.duckduckgo.com/html/"
SEARCH_SUFFIX = " real estate listings"
RESULT_ANCHOR_SELECTOR = "a.result__a"

ALLOWED_HOSTS: tuple[str, ...] = (
    "zillow.com",
    "realtor.com",
    "redfin.com",
    "trulia.com",
    "homes.com",
    "apartments.com",
    "rent.com",
    "apartmentfinder.com",
)


# -----------------------
# URL helpers
# -----------------------


def normalize_url(url: str) -> str:
    """Comparison key: lower-cased scheme/host, fragment dropped."""
    parts = urlsplit(url.strip())
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", parts.query, ""))


def is_allowed_host(url: str) -> bool:
    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        return False
    return bool(host) and any(site in host for site in ALLOWED_HOSTS)


def resolve_result_href(href: str, base: str = SEARCH_ENDPOINT) -> str | None:
    """
    Absolutize a result anchor. The search surface wraps targets in a
    redirect (`//duckduckgo.com/l/?uddg=<target>`); unwrap it when present.
    """
    if not href or not href.strip():
        return None
    try:
        full = urljoin(base, href.strip())
        parts = urlsplit(full)
    except ValueError:
        return None
    target = parse_qs(parts.query).get("uddg")
    if target and target[0]:
        full = target[0]
        try:
            parts = urlsplit(full)
        except ValueError:
            return None
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return None
    return full


def fallback_urls(location: str) -> list[str]:
    """Direct search pages on the three largest hosts for a location."""
    loc = quote(location, safe="")
    return [
        f"https://www.zillow.com/homes/{loc}_rb/",
        f"https://www.realtor.com/realestateandhomes-search/{loc}",
        f"https://www.redfin.com/city/{loc}",
    ]


def parse_result_links(html: str) -> list[str]:
    """Allow-listed absolute URLs from one search results page, in page order."""
    soup = BeautifulSoup(html, "lxml")
    out: list[str] = []
    for a in soup.select(RESULT_ANCHOR_SELECTOR):
        href = a.get("href")
        url = resolve_result_href(href) if isinstance(href, str) else None
        if url and is_allowed_host(url):
            out.append(url)
    return out


def dedupe_urls(urls: Iterable[str], limit: int | None = None) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for u in urls:
        key = normalize_url(u)
        if key in seen:
            continue
        seen.add(key)
        out.append(u)
        if limit is not None and len(out) >= limit:
            break
    return out


# -----------------------
# Discovery
# -----------------------


@dataclass
class DiscoveryRun:
    """Run-wide accumulator. `urls` may hold duplicates until `unique()` is called."""

    cap: int = 20
    urls: list[str] = field(default_factory=list)
    degraded: list[str] = field(default_factory=list)
    used_fallback: bool = False

    @property
    def is_full(self) -> bool:
        return len(self.urls) >= self.cap

    def add(self, url: str) -> bool:
        if self.is_full:
            return False
        self.urls.append(url)
        return True

    def add_fallback(self, location: str) -> None:
        for url in fallback_urls(location):
            if not self.add(url):
                break
        self.used_fallback = True

    def unique(self, limit: int) -> list[str]:
        return dedupe_urls(self.urls, limit)


def search_phrase(
    phrase: str,
    *,
    user_agent: str,
    timeout_s: float,
    http_get: HttpGet | None = None,
) -> list[str]:
    """
    Run one search and return allow-listed result URLs.

    Raises:
        HtmlFetcherError: the search request failed.
    """
    html = fetch_html(
        SEARCH_ENDPOINT,
        params={"q": phrase + SEARCH_SUFFIX},
        user_agent=user_agent,
        timeout_s=timeout_s,
        accept=SEARCH_ACCEPT,
        http_get=http_get,
    )
    return parse_result_links(html)


def discover(
    phrases: Iterable[str],
    *,
    query: str,
    user_agent: str,
    timeout_s: float,
    cap: int = 20,
    http_get: HttpGet | None = None,
    checkpoint: Callable[[], None] | None = None,
) -> DiscoveryRun:
    """
    Search each phrase in order, accumulating into one capped URL list.

    A failed search with nothing collected yet seeds fallback URLs for the
    phrase's location. If the run ends with no URLs at all, fallback URLs for
    the request's own location are used.
    """
    run = DiscoveryRun(cap=cap)
    for phrase in phrases:
        if checkpoint is not None:
            checkpoint()
        try:
            found = search_phrase(phrase, user_agent=user_agent, timeout_s=timeout_s, http_get=http_get)
        except HtmlFetcherError as e:
            logger.warning("search failed for %r: %s", phrase, e)
            run.degraded.append(f"discovery_degraded:{phrase}")
            if not run.urls:
                run.add_fallback(extract_location(phrase) or "")
            continue

        for url in found:
            if not run.add(url):
                break
        logger.info("search %r: %d allow-listed results (run total %d)", phrase, len(found), len(run.urls))

    if not run.urls:
        logger.warning("no listing URLs discovered; using fallback sites")
        run.degraded.append("discovery_degraded:no_results")
        run.add_fallback(extract_location(query) or "")
    return run


__all__ = [
    "SEARCH_SUFFIX",
    "RESULT_ANCHOR_SELECTOR",
    "ALLOWED_HOSTS",
    "DiscoveryRun",
    "SEARCH_ENDPOINT",
    "dedupe_urls",
    "discover",
    "fallback_urls",
    "is_allowed_host",
    "normalize_url",
    "parse_result_links",
    "resolve_result_href",
    "search_phrase",
]
