# dealscout/agents/responder.py
"""
Plain-text replies: the conversational short-circuit and the final summary
of a search run. Both are single generative calls with no fallback.
"""

from __future__ import annotations

from collections.abc import Sequence

from dealscout.core.llm import ChatProvider, system_user
from dealscout.schemas.models import AnalyzedProperty

CONVERSATION_SYSTEM = (
    "You are Jarvis, an advanced AI real estate assistant. Provide helpful, concise responses about real estate."
)
SUMMARY_SYSTEM = "You are Jarvis, an advanced AI assistant. Be concise, helpful, and natural."

MAX_REPLY_TOKENS = 8192


def _money(value: float) -> str:
    return f"${value:,.0f}"


def format_rows(properties: Sequence[AnalyzedProperty]) -> str:
    return "\n".join(
        f"{i}. {p.title} - Price: {_money(p.purchase_price)} - Estimated Profit: {_money(p.profit)}"
        for i, p in enumerate(properties, start=1)
    )


def summary_prompt(query: str, properties: Sequence[AnalyzedProperty], threshold: float) -> str:
    return (
        f'Based on the property search for "{query}", I found {len(properties)} properties '
        f"that meet the {_money(threshold)} profit requirement.\n\n"
        f"Properties:\n{format_rows(properties)}\n\n"
        "Provide a natural, conversational response as Jarvis explaining these findings. "
        "Ask if the user wants to open the property links."
    )


def converse(query: str, provider: ChatProvider) -> str:
    return provider.complete(
        system_user(CONVERSATION_SYSTEM, query),
        temperature=1.0,
        max_tokens=MAX_REPLY_TOKENS,
    )


def summarize(query: str, properties: Sequence[AnalyzedProperty], provider: ChatProvider, *, threshold: float) -> str:
    return provider.complete(
        system_user(SUMMARY_SYSTEM, summary_prompt(query, properties, threshold)),
        temperature=1.0,
        max_tokens=MAX_REPLY_TOKENS,
    )


__all__ = ["converse", "format_rows", "summarize", "summary_prompt"]
