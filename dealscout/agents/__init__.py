# dealscout/agents/__init__.py
"""
Generative-call agents of the query-to-deal pipeline.

Each agent owns one prompt and its documented fallback:
  - intent_classifier : no fallback (ClassificationError)
  - query_expander    : templated phrases
  - deal_analyzer     : fixed-ratio arithmetic
  - responder         : no fallback
"""

from .deal_analyzer import analyze_property, fallback_analysis, parse_price
from .intent_classifier import classify_intent
from .query_expander import expand_query, fallback_phrases
from .responder import converse, summarize

__all__ = [
    "analyze_property",
    "classify_intent",
    "converse",
    "expand_query",
    "fallback_analysis",
    "fallback_phrases",
    "parse_price",
    "summarize",
]
