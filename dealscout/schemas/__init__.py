# dealscout/schemas/__init__.py
from .models import (
    AgentRequest,
    AnalysisSource,
    AnalyzedProperty,
    ConversationResponse,
    ErrorEnvelope,
    IntentCategory,
    IntentResult,
    ListingCandidate,
    SearchResponse,
)

__all__ = [
    "AgentRequest",
    "AnalysisSource",
    "AnalyzedProperty",
    "ConversationResponse",
    "ErrorEnvelope",
    "IntentCategory",
    "IntentResult",
    "ListingCandidate",
    "SearchResponse",
]
