# tests/unit/test_intent_classifier.py

import json

import pytest

from dealscout.agents import classify_intent
from dealscout.core.errors import ClassificationError
from tests.utils import ScriptedProvider, intent_reply


def test_search_intent():
    provider = ScriptedProvider(intent=intent_reply(True, reasoning="asks for condos"))
    result = classify_intent("condos in Miami", provider)
    assert result.is_property_search is True
    assert result.category == "search"
    assert result.reasoning == "asks for condos"

    _, call = provider.calls[0]
    assert call["json_mode"] is True
    assert 'Query: "condos in Miami"' in call["prompt"]


def test_conversation_requires_both_signals():
    provider = ScriptedProvider(intent=intent_reply(False, "conversation"))
    result = classify_intent("what is a cap rate?", provider)
    assert result.is_property_search is False
    assert result.category == "conversation"


def test_mixed_signals_route_to_search():
    provider = ScriptedProvider(intent=intent_reply(False, "search"))
    assert classify_intent("hmm", provider).category == "search"


def test_fenced_json_is_accepted():
    fenced = "```json\n" + intent_reply(True) + "\n```"
    assert classify_intent("homes in Reno", ScriptedProvider(intent=fenced)).is_property_search


def test_string_boolean_is_accepted():
    reply = json.dumps({"type": "conversation", "isPropertySearch": "false", "reasoning": ""})
    assert classify_intent("hi", ScriptedProvider(intent=reply)).category == "conversation"


@pytest.mark.parametrize(
    "reply",
    [
        "not json",
        json.dumps({"type": "search"}),
        json.dumps({"type": "search", "isPropertySearch": "maybe"}),
        RuntimeError("connection reset"),
    ],
)
def test_unusable_output_raises_classification_error(reply):
    with pytest.raises(ClassificationError):
        classify_intent("homes in Reno", ScriptedProvider(intent=reply))
