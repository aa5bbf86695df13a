# tests/unit/test_fetch_errors.py

import pytest
import requests

from dealscout.core.fetch import (
    PAGE_ACCEPT,
    SEARCH_ACCEPT,
    CaptchaBlockedError,
    HtmlFetcherError,
    NetworkError,
    browser_headers,
    classify_fetcher_error,
    error_for_status,
    fetch_html,
    fetcher_error_guard,
)


def test_classify_maps_requests_errors_to_network():
    err = classify_fetcher_error(requests.Timeout("read timed out"))
    assert isinstance(err, NetworkError)


def test_classify_detects_waf_messages():
    err = classify_fetcher_error(RuntimeError("Access Denied by Incapsula"))
    assert isinstance(err, CaptchaBlockedError)


def test_classify_passes_typed_errors_through():
    original = NetworkError("x")
    assert classify_fetcher_error(original) is original


def test_guard_normalizes_unknown_exceptions():
    with pytest.raises(HtmlFetcherError) as ei:
        with fetcher_error_guard():
            raise ValueError("bad markup")
    assert type(ei.value) is HtmlFetcherError
    assert isinstance(ei.value.__cause__, ValueError)


def test_browser_headers():
    h = browser_headers("UA/1.0")
    assert h == {"User-Agent": "UA/1.0", "Accept": PAGE_ACCEPT, "Accept-Language": "en-US,en;q=0.9"}
    assert "Accept-Language" not in browser_headers("UA/1.0", accept=SEARCH_ACCEPT, language=False)


def test_fetch_html_passes_through_to_getter():
    seen = {}

    def getter(url, params, headers, timeout_s):
        seen.update(url=url, params=params, headers=headers, timeout_s=timeout_s)
        return "<html></html>"

    out = fetch_html("https://www.zillow.com/a", user_agent="UA", timeout_s=15, http_get=getter)
    assert out == "<html></html>"
    assert seen["url"] == "https://www.zillow.com/a"
    assert seen["params"] is None
    assert seen["headers"]["User-Agent"] == "UA"
    assert seen["timeout_s"] == 15


def test_fetch_html_wraps_getter_failures():
    def getter(url, params, headers, timeout_s):
        raise requests.ConnectionError("refused")

    with pytest.raises(NetworkError):
        fetch_html("https://www.zillow.com/a", user_agent="UA", timeout_s=1, http_get=getter)


def test_error_for_status_detects_bot_walls():
    blocked = error_for_status("https://www.zillow.com/a", 403, "<title>Press & Hold to confirm you are human</title> px-captcha")
    assert isinstance(blocked, CaptchaBlockedError)
    assert isinstance(error_for_status("https://www.zillow.com/a", 403, "<h1>Forbidden</h1>"), NetworkError)
    assert isinstance(error_for_status("https://www.zillow.com/a", 404, "captcha"), NetworkError)
