# dealscout/core/fetch/html_fetcher.py
"""
Browser-like HTML fetcher for search and listing pages.

Every call carries an explicit timeout and never retries. Callers decide
whether a failure is fatal; the pipeline treats it as a per-item skip.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeAlias

import requests

from .errors import error_for_status, fetcher_error_guard

# (url, params, headers, timeout_s) -> html
HttpGet: TypeAlias = Callable[[str, Mapping[str, str] | None, Mapping[str, str], float], str]

SEARCH_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
PAGE_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


def browser_headers(user_agent: str, *, accept: str = PAGE_ACCEPT, language: bool = True) -> dict[str, str]:
    headers = {"User-Agent": user_agent, "Accept": accept}
    if language:
        headers["Accept-Language"] = "en-US,en;q=0.9"
    return headers


def requests_get(
    url: str,
    params: Mapping[str, str] | None,
    headers: Mapping[str, str],
    timeout_s: float,
) -> str:
    """Default HttpGet: one GET via requests, typed errors on failure."""
    with fetcher_error_guard():
        resp = requests.get(url, params=params, headers=dict(headers), timeout=timeout_s)
        if resp.status_code >= 400:
            raise error_for_status(url, resp.status_code, resp.text or "")
        return resp.text


def fetch_html(
    url: str,
    *,
    user_agent: str,
    timeout_s: float,
    params: Mapping[str, str] | None = None,
    accept: str = PAGE_ACCEPT,
    http_get: HttpGet | None = None,
) -> str:
    """
    Fetch one page as text.

    Raises:
        HtmlFetcherError (NetworkError / CaptchaBlockedError) on any failure.
    """
    getter = http_get or requests_get
    headers = browser_headers(user_agent, accept=accept, language=accept == PAGE_ACCEPT)
    with fetcher_error_guard():
        return getter(url, params, headers, timeout_s)


__all__ = ["HttpGet", "browser_headers", "fetch_html", "requests_get", "SEARCH_ACCEPT", "PAGE_ACCEPT"]
