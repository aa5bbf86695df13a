# dealscout/schemas/models.py

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

IntentCategory = Literal["search", "conversation"]
AnalysisSource = Literal["model", "fallback"]

# =========================
# Inbound
# =========================


class AgentRequest(BaseModel):
    """Body of one request to the agent endpoint."""

    query: str = Field(..., description="Raw natural-language text from the user.")

    @field_validator("query")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be empty")
        return v


# =========================
# Pipeline entities
# =========================


class IntentResult(BaseModel):
    """Classification of one query. Derived once per request."""

    model_config = ConfigDict(frozen=True)

    is_property_search: bool = Field(..., description="True when the query asks for listings.")
    category: IntentCategory = Field(..., description="search | conversation")
    reasoning: str = Field("", description="Short model-provided justification.")


class ListingCandidate(BaseModel):
    """
    One listing fragment mined from a source page.

    `price_text` holds digits only. `address` keeps the full title text while
    `title` is truncated for display.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Display title (≤ 100 chars).")
    price_text: str = Field(..., description="Listed price reduced to digits.")
    address: str = Field("", description="Address or full title text.")
    source_url: str = Field(..., description="Page the listing was scraped from.")
    resolved_url: str = Field(..., description="Absolute link to the listing (or the source page).")
    placeholder: bool = Field(False, description="True for the synthesized stand-in when nothing was extracted.")


class AnalyzedProperty(ListingCandidate):
    """A ListingCandidate merged with its investment estimate. Built once, never mutated."""

    purchase_price: float = Field(..., description="Price parsed from price_text.")
    arv: float = Field(..., description="After-repair value.")
    repairs: float = Field(..., description="Estimated repair cost.")
    mov: float = Field(..., description="Resale-commission reserve.")
    additional_costs: float = Field(..., description="Closing and holding costs.")
    profit: float = Field(..., description="arv - (purchase_price + repairs + mov + additional_costs).")
    roi_pct: float | None = Field(None, description="profit / (purchase_price + repairs) * 100.")
    analysis_note: str = Field("", description="One-sentence rationale or the fallback marker.")
    analysis_source: AnalysisSource = Field("model")


# =========================
# Outbound envelopes
# =========================


class ConversationResponse(BaseModel):
    type: Literal["conversation"] = "conversation"
    response: str
    status: Literal["completed"] = "completed"


class SearchResponse(BaseModel):
    type: Literal["search"] = "search"
    response: str
    properties: list[AnalyzedProperty] = Field(default_factory=list)
    status: Literal["completed"] = "completed"
    query: str


class ErrorEnvelope(BaseModel):
    error: str
