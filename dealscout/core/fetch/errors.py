# dealscout/core/fetch/errors.py
"""
Typed failures for search and listing-page requests.

Every request failure surfaces as an HtmlFetcherError subclass so discovery
and extraction can treat it as a per-item skip:
  - NetworkError        : timeout, connection failure, HTTP status >= 400
  - CaptchaBlockedError : the site answered with a bot wall

Helpers
-------
- error_for_status(url, status, body)  → typed error for a failed response
- classify_fetcher_error(exc)          → typed error for any exception
- fetcher_error_guard()                → context manager applying the above
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager

import requests


class HtmlFetcherError(RuntimeError):
    """A search or listing page could not be retrieved."""


class NetworkError(HtmlFetcherError):
    """Transport failure or non-success HTTP status."""


class CaptchaBlockedError(HtmlFetcherError):
    """A CAPTCHA or WAF page was served instead of content."""


# Listing portals front their pages with these vendors' challenge pages
_CAPTCHA_WAF_PATTERN = re.compile(
    r"(captcha|cf-chl|hcaptcha|recaptcha|perimeterx|px-captcha|incapsula|imperva|robot\s*check|access\s*denied)",
    re.IGNORECASE,
)

# Statuses that usually mean a bot wall rather than a missing page
BLOCK_STATUSES = frozenset({403, 429, 503})


def looks_blocked(text: str) -> bool:
    return bool(_CAPTCHA_WAF_PATTERN.search(text or ""))


def error_for_status(url: str, status: int, body: str = "") -> HtmlFetcherError:
    if status in BLOCK_STATUSES and looks_blocked(body[:2000]):
        return CaptchaBlockedError(f"bot wall at {url} (status={status})")
    return NetworkError(f"HTTP {status} for {url}")


def classify_fetcher_error(exc: Exception) -> HtmlFetcherError:
    """requests errors become NetworkError; bot-wall wording becomes CaptchaBlockedError."""
    if isinstance(exc, HtmlFetcherError):
        return exc
    if isinstance(exc, requests.RequestException):
        return NetworkError(str(exc) or type(exc).__name__)

    msg = f"{type(exc).__name__}: {exc}"
    if looks_blocked(msg):
        return CaptchaBlockedError(msg)
    return HtmlFetcherError(msg)


@contextmanager
def fetcher_error_guard() -> Iterator[None]:
    try:
        yield
    except HtmlFetcherError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise classify_fetcher_error(exc) from exc


__all__ = [
    "BLOCK_STATUSES",
    "CaptchaBlockedError",
    "HtmlFetcherError",
    "NetworkError",
    "classify_fetcher_error",
    "error_for_status",
    "fetcher_error_guard",
    "looks_blocked",
]
