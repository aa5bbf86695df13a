# dealscout/core/llm/mock_provider.py
"""
Mock Chat Provider

Purpose
-------
Deterministic, network-free provider so the whole pipeline can run in local
dev and tests. It recognizes which call it is serving from the JSON keys the
prompt asks for and answers with plausible, repeatable content.

Rules
-----
- prompt asks for "isPropertySearch" → keyword-based intent
- prompt asks for "queries"          → property-type variants for the location
- prompt asks for "arv"              → fixed-ratio estimate from "Listed Price"
- anything else                      → short plain-text reply
"""

from __future__ import annotations

import json
import re

from ..normalize.location import extract_location
from .provider_base import ChatMessage, ChatProvider

_QUERY_RE = re.compile(r'Query:\s*"(?P<q>.*?)"', re.DOTALL)
_REQUEST_RE = re.compile(r'request:\s*"(?P<q>.*?)"', re.DOTALL)
_PRICE_RE = re.compile(r"Listed Price:\s*\$?(?P<p>[\d,]+)")
_FOUND_RE = re.compile(r"I found (?P<n>\d+) properties")

_PROPERTY_WORDS = re.compile(
    r"\b(house|houses|home|homes|condo|condos|apartment|apartments|townhouse|townhouses|"
    r"propert(?:y|ies)|listings?|for sale|duplex|flip|fixer)\b",
    re.IGNORECASE,
)


class MockChatProvider(ChatProvider):
    """Deterministic, prompt-pattern-based mock provider."""

    def complete(
        self,
        messages: list[ChatMessage],
        *,
        json_mode: bool = False,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        prompt = messages[-1]["content"] if messages else ""

        if '"isPropertySearch"' in prompt:
            return json.dumps(_intent(prompt))
        if '"queries"' in prompt:
            return json.dumps(_variants(prompt))
        if '"arv"' in prompt:
            return json.dumps(_estimate(prompt))
        return _reply(prompt)


def _intent(prompt: str) -> dict:
    m = _QUERY_RE.search(prompt)
    query = m.group("q") if m else prompt
    is_search = bool(_PROPERTY_WORDS.search(query))
    return {
        "type": "search" if is_search else "conversation",
        "isPropertySearch": is_search,
        "reasoning": "mentions a property type" if is_search else "general question",
    }


def _variants(prompt: str) -> dict:
    m = _REQUEST_RE.search(prompt)
    loc = extract_location(m.group("q") if m else prompt)
    kinds = ["homes for sale", "condos for sale", "fixer upper houses", "foreclosures", "duplexes for sale", "new listings"]
    return {"queries": [f"{k} in {loc}" for k in kinds]}


def _estimate(prompt: str) -> dict:
    m = _PRICE_RE.search(prompt)
    price = int(m.group("p").replace(",", "")) if m else 0
    arv = round(price * 1.25)
    return {
        "arv": arv,
        "repairs": round(price * 0.08),
        "mov": round(arv * 0.03),
        "additionalCosts": round(price * 0.03),
        "profit": 0,
        "analysis": "Offline estimate using fixed ratios.",
    }


def _reply(prompt: str) -> str:
    m = _FOUND_RE.search(prompt)
    if m:
        n = int(m.group("n"))
        if n == 0:
            return "I couldn't find any properties that clear the profit bar this time. Want me to try another area?"
        return f"I found {n} properties worth a look. Want me to open the listing links?"
    return "I'm running in offline mode, but happy to talk real estate. What would you like to know?"


__all__ = ["MockChatProvider"]
