# dealscout/core/fetch/__init__.py
from .errors import (
    BLOCK_STATUSES,
    CaptchaBlockedError,
    HtmlFetcherError,
    NetworkError,
    classify_fetcher_error,
    error_for_status,
    fetcher_error_guard,
    looks_blocked,
)
from .html_fetcher import PAGE_ACCEPT, SEARCH_ACCEPT, HttpGet, browser_headers, fetch_html, requests_get

__all__ = [
    "BLOCK_STATUSES",
    "CaptchaBlockedError",
    "HtmlFetcherError",
    "NetworkError",
    "classify_fetcher_error",
    "error_for_status",
    "fetcher_error_guard",
    "looks_blocked",
    "HttpGet",
    "browser_headers",
    "fetch_html",
    "requests_get",
    "SEARCH_ACCEPT",
    "PAGE_ACCEPT",
]
