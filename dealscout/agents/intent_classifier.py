# dealscout/agents/intent_classifier.py
"""
Intent Classifier

Decides whether a query is a property search or general conversation.
There is no deterministic fallback: unusable model output raises
ClassificationError and the request fails with a generic error.
"""

from __future__ import annotations

import logging

from dealscout.core.errors import ClassificationError, ModelOutputError
from dealscout.core.llm import ChatProvider, parse_json_object, user_only
from dealscout.schemas.models import IntentResult

logger = logging.getLogger(__name__)

_PROMPT = """Analyze the following query and determine if it's a property search request or a normal conversation.
Query: "{query}"

Respond in JSON format:
{{
  "type": "search" | "conversation",
  "isPropertySearch": true/false,
  "reasoning": "brief explanation"
}}"""


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ClassificationError(f"isPropertySearch is not a boolean: {value!r}")


def classify_intent(query: str, provider: ChatProvider) -> IntentResult:
    """
    Classify one query.

    Only an explicit conversation verdict (isPropertySearch false AND type
    "conversation") routes to the conversational path; anything else is a search.

    Raises:
        ClassificationError: the call failed or returned an unusable shape.
    """
    try:
        text = provider.complete(user_only(_PROMPT.format(query=query)), json_mode=True, temperature=0.7)
        data = parse_json_object(text, required=("type", "isPropertySearch"), label="intent")
    except ModelOutputError as e:
        raise ClassificationError(str(e)) from e
    except Exception as e:  # noqa: BLE001 - provider transport errors
        raise ClassificationError(f"intent call failed: {type(e).__name__}: {e}") from e

    is_search = _as_bool(data["isPropertySearch"])
    kind = str(data["type"]).strip().lower()
    conversation = (not is_search) and kind == "conversation"

    result = IntentResult(
        is_property_search=not conversation,
        category="conversation" if conversation else "search",
        reasoning=str(data.get("reasoning") or ""),
    )
    logger.info("intent=%s (%s)", result.category, result.reasoning[:120])
    return result


__all__ = ["classify_intent"]
