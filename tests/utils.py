"""
Single source of truth for test data, factories, and scripted collaborators.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from typing import Any, Union
from urllib.parse import quote

from dealscout.config import Settings
from dealscout.core.discovery import SEARCH_ENDPOINT, SEARCH_SUFFIX
from dealscout.core.fetch import NetworkError
from dealscout.core.llm import ChatMessage
from dealscout.schemas.models import AnalyzedProperty, ListingCandidate

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_QUERY = "houses for sale in Miami"
DEFAULT_PAGE_URL = "https://www.zillow.com/homes/Miami_rb/"
DEFAULT_PRICE = "250000"

_PRICE_RE = re.compile(r"Listed Price:\s*\$(?P<p>[\d,]+)")


def make_settings(**overrides: Any) -> Settings:
    """Settings that never touch the environment; mock provider by default."""
    base: dict[str, Any] = {"llm_provider": "mock"}
    base.update(overrides)
    return Settings(**base)


# -----------------------------
# Entity factories
# -----------------------------


def make_candidate(
    title: str = "123 Ocean Dr, Miami, FL 33139",
    price_text: str = DEFAULT_PRICE,
    *,
    source_url: str = DEFAULT_PAGE_URL,
    resolved_url: str | None = None,
    placeholder: bool = False,
) -> ListingCandidate:
    return ListingCandidate(
        title=title,
        price_text=price_text,
        address=title,
        source_url=source_url,
        resolved_url=resolved_url or f"{source_url}#{quote(title)}",
        placeholder=placeholder,
    )


def make_property(title: str = "123 Ocean Dr", profit: float = 20000.0, price: float = 250000.0) -> AnalyzedProperty:
    """Analyzed property with a chosen profit; other numbers are filler."""
    cand = make_candidate(title, str(int(price)))
    return AnalyzedProperty(
        **cand.model_dump(),
        purchase_price=price,
        arv=price + profit,
        repairs=0.0,
        mov=0.0,
        additional_costs=0.0,
        profit=profit,
        roi_pct=profit / price * 100,
        analysis_note="test",
        analysis_source="model",
    )


# -----------------------------
# HTML builders
# -----------------------------


def listing_card(
    title: str,
    price: str,
    href: str | None = None,
    *,
    container: str = "property-card",
    title_class: str = "property-address",
    price_class: str = "price",
) -> str:
    link = f'<a href="{href}">View</a>' if href else ""
    return (
        f'<div class="{container}">'
        f'<div class="{title_class}">{title}</div>'
        f'<span class="{price_class}">{price}</span>'
        f"{link}</div>"
    )


def listing_page(*cards: str) -> str:
    return "<html><body><main>" + "".join(cards) + "</main></body></html>"


def search_q(phrase: str) -> str:
    """The `q` parameter sent for one search phrase."""
    return phrase + SEARCH_SUFFIX


def search_results_page(urls: list[str], *, wrap_redirect: bool = False) -> str:
    """Search results markup; optionally wraps targets in the engine's redirect link."""
    anchors = []
    for u in urls:
        href = f"//duckduckgo.com/l/?uddg={quote(u, safe='')}&rut=abc123" if wrap_redirect else u
        anchors.append(f'<div class="result"><h2><a class="result__a" href="{href}">{u}</a></h2></div>')
    return "<html><body><div id='links'>" + "".join(anchors) + "</div></body></html>"


# -----------------------------
# Scripted generative provider
# -----------------------------

Reply = Union[str, Exception, Callable[[str], str]]


def prompt_kind(prompt: str) -> str:
    """Which pipeline call a prompt belongs to, judged by the JSON keys it asks for."""
    if '"isPropertySearch"' in prompt:
        return "intent"
    if '"queries"' in prompt:
        return "expansion"
    if '"arv"' in prompt:
        return "analysis"
    if "I found" in prompt and "profit requirement" in prompt:
        return "summary"
    return "conversation"


def intent_reply(is_search: bool = True, kind: str | None = None, reasoning: str = "test") -> str:
    return json.dumps(
        {
            "type": kind or ("search" if is_search else "conversation"),
            "isPropertySearch": is_search,
            "reasoning": reasoning,
        }
    )


def estimate_by_price(table: Mapping[int, Mapping[str, Any]]) -> Callable[[str], str]:
    """Analysis reply keyed by the listed price found in the prompt."""

    def _reply(prompt: str) -> str:
        m = _PRICE_RE.search(prompt)
        price = int(m.group("p").replace(",", "")) if m else 0
        if price not in table:
            raise RuntimeError(f"no scripted estimate for price {price}")
        return json.dumps(dict(table[price]))

    return _reply


class ScriptedProvider:
    """
    ChatProvider double. Each call kind (intent, expansion, analysis, summary,
    conversation) maps to a reply: a literal string, an exception to raise, or
    a callable that receives the prompt text.
    """

    def __init__(self, **replies: Reply) -> None:
        self.replies: dict[str, Reply] = {
            "intent": intent_reply(True),
            "expansion": json.dumps({"queries": ["homes for sale in Miami"]}),
            "analysis": RuntimeError("analysis not scripted"),
            "summary": "Here is what I found.",
            "conversation": "Happy to help with real estate questions.",
        }
        self.replies.update(replies)
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def kinds(self) -> list[str]:
        return [k for k, _ in self.calls]

    def complete(
        self,
        messages: list[ChatMessage],
        *,
        json_mode: bool = False,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        prompt = messages[-1]["content"] if messages else ""
        kind = prompt_kind(prompt)
        self.calls.append(
            (kind, {"json_mode": json_mode, "temperature": temperature, "max_tokens": max_tokens, "prompt": prompt})
        )
        reply = self.replies[kind]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


# -----------------------------
# Fake web
# -----------------------------

Page = str | Exception


class FakeWeb:
    """
    HttpGet double. Search requests are answered from `searches`, keyed by
    the `q` parameter; every other URL from `pages`. Unknown search phrases
    return an empty results page, unknown pages raise NetworkError.
    """

    def __init__(self, *, searches: Mapping[str, Page] | None = None, pages: Mapping[str, Page] | None = None) -> None:
        self.searches = dict(searches or {})
        self.pages = dict(pages or {})
        self.calls: list[tuple[str, dict[str, str] | None, dict[str, str], float]] = []

    @property
    def search_terms(self) -> list[str]:
        return [p["q"] for u, p, _, _ in self.calls if u == SEARCH_ENDPOINT and p]

    @property
    def page_urls(self) -> list[str]:
        return [u for u, _, _, _ in self.calls if u != SEARCH_ENDPOINT]

    def __call__(
        self,
        url: str,
        params: Mapping[str, str] | None,
        headers: Mapping[str, str],
        timeout_s: float,
    ) -> str:
        self.calls.append((url, dict(params) if params else None, dict(headers), timeout_s))
        if url == SEARCH_ENDPOINT:
            page: Page = self.searches.get((params or {}).get("q", ""), search_results_page([]))
        elif url in self.pages:
            page = self.pages[url]
        else:
            page = NetworkError(f"HTTP 404 for {url}")
        if isinstance(page, Exception):
            raise page
        return page


__all__ = [
    "DEFAULT_PAGE_URL",
    "DEFAULT_PRICE",
    "DEFAULT_QUERY",
    "FakeWeb",
    "ScriptedProvider",
    "estimate_by_price",
    "intent_reply",
    "listing_card",
    "listing_page",
    "make_candidate",
    "make_property",
    "make_settings",
    "prompt_kind",
    "search_q",
    "search_results_page",
]
