# dealscout/agents/query_expander.py
"""
Query Expander

Turns one request into an ordered list of search phrases. The model path
asks for 8-10 variants; any failure falls back to eight fixed templates built
around the location found in the request.
"""

from __future__ import annotations

import logging

from dealscout.core.errors import ModelOutputError
from dealscout.core.llm import ChatProvider, parse_json_object, system_user
from dealscout.core.normalize.location import extract_location

logger = logging.getLogger(__name__)

_SYSTEM = "You are a helpful assistant that generates search queries. Always respond with valid JSON only."

_PROMPT = """Generate 8-10 different search query variations for finding properties based on this request: "{query}"

Create variations like:
- [property type] in [location]
- [property type] for sale in [location]
- [property type] listings [location]
- etc.

Return a JSON object with a "queries" array: {{"queries": ["query1", "query2", ...]}}"""

FALLBACK_TEMPLATES: tuple[str, ...] = (
    "condos in {loc}",
    "apartments in {loc}",
    "houses for sale in {loc}",
    "townhouses in {loc}",
    "luxury homes in {loc}",
    "investment properties in {loc}",
    "real estate listings in {loc}",
    "properties for sale in {loc}",
)


def fallback_phrases(query: str) -> list[str]:
    """Deterministic templated phrases; identical for identical locations."""
    loc = extract_location(query)
    return [t.format(loc=loc) for t in FALLBACK_TEMPLATES]


def expand_query(query: str, provider: ChatProvider) -> tuple[list[str], bool]:
    """
    Returns (phrases, degraded). `degraded` is True when the templated
    fallback was used.
    """
    try:
        text = provider.complete(system_user(_SYSTEM, _PROMPT.format(query=query)), json_mode=True, temperature=1.0)
        data = parse_json_object(text, required=("queries",), label="expansion")
        raw = data["queries"]
        if not isinstance(raw, list):
            raise ModelOutputError("expansion: 'queries' is not a list")
        phrases = [" ".join(q.split()) for q in raw if isinstance(q, str) and q.strip()]
        if not phrases:
            raise ModelOutputError("expansion: no usable phrases")
        return phrases, False
    except Exception as e:  # noqa: BLE001 - any failure degrades to templates
        logger.warning("query expansion degraded: %s", e)
        return fallback_phrases(query), True


__all__ = ["FALLBACK_TEMPLATES", "expand_query", "fallback_phrases"]
