# dealscout/agents/deal_analyzer.py
"""
Deal Analyzer

Purpose
-------
Estimate flip economics for one listing: after-repair value (ARV), repairs,
resale-commission reserve (MOV), closing/holding costs and net profit.

Design
------
- Model path: one JSON-mode call; each field coerced to a number with a
  field-specific default.
- Fallback path (call or parse failure): fixed ratios of the listed price.
- `profit` is always recomputed here, never taken from the model. A
  model-supplied `mov` / `additionalCosts` is kept as given.

Public API
----------
analyze_property(candidate, query, provider) -> AnalyzedProperty
fallback_analysis(candidate) -> AnalyzedProperty
parse_price(price_text) -> int
"""

from __future__ import annotations

import logging
import re
from typing import Any

from dealscout.core.llm import ChatProvider, parse_json_object, system_user
from dealscout.schemas.models import AnalysisSource, AnalyzedProperty, ListingCandidate

logger = logging.getLogger(__name__)

FALLBACK_NOTE = "Estimated calculation"

# Ratios (fractions of price unless noted)
MOV_RATE = 0.03  # of ARV
ADDITIONAL_COSTS_RATE = 0.04
FALLBACK_ARV_RATE = 1.2
FALLBACK_REPAIRS_RATE = 0.1

_SYSTEM = "You are a real estate investment analyst. Always respond with valid JSON only, no markdown formatting."

_PROMPT = """You are a real estate investment expert. Analyze this property:

Property Details: {title}
Listed Price: ${price:,}
Location: {location}

For a property investment analysis, provide realistic estimates:
1. ARV (After Repair Value) - What the property could sell for after renovations
2. Estimated Repair Costs - Typical renovation costs needed
3. MOV (Market Operating Value) - 3% of ARV (standard real estate agent commission)
4. Additional Costs - Closing costs (2-3% of purchase), holding costs, etc.
5. Total Profit Calculation - ARV minus (Purchase Price + Repairs + MOV + Additional Costs)

Use realistic market data. For properties in good condition, repairs might be 5-10% of price.
For fixer-uppers, repairs could be 20-40% of price.
The buyer's original request was: "{query}"

Return ONLY valid JSON (no markdown, no code blocks):
{{
  "arv": number (estimated after repair value),
  "repairs": number (estimated repair costs),
  "mov": number (3% of ARV),
  "additionalCosts": number (closing, holding, etc - roughly 3-5% of purchase),
  "profit": number (calculated profit: arv - price - repairs - mov - additionalCosts),
  "analysis": "One sentence explaining the investment potential"
}}"""

_LEADING_INT_RE = re.compile(r"^[-+]?\d+")


# -----------------------------
# Coercion helpers
# -----------------------------


def parse_price(price_text: str) -> int:
    digits = "".join(ch for ch in price_text if ch.isdigit())
    return int(digits) if digits else 0


def coerce_amount(value: Any) -> float | None:
    """
    Numbers pass through; text is parsed as a leading integer after dropping
    currency symbols, commas and whitespace. Returns None when nothing usable
    (or zero) is found, so the caller's default applies.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        cleaned = re.sub(r"[\s$,]", "", value)
        m = _LEADING_INT_RE.match(cleaned)
        if m:
            parsed = int(m.group(0))
            return float(parsed) if parsed != 0 else None
    return None


def compute_profit(arv: float, purchase_price: float, repairs: float, mov: float, additional_costs: float) -> float:
    return arv - purchase_price - repairs - mov - additional_costs


def compute_roi_pct(profit: float, purchase_price: float, repairs: float) -> float | None:
    basis = purchase_price + repairs
    if basis <= 0:
        return None
    return profit / basis * 100


def build_analyzed(
    candidate: ListingCandidate,
    *,
    arv: float,
    repairs: float,
    mov: float,
    additional_costs: float,
    note: str,
    source: AnalysisSource,
) -> AnalyzedProperty:
    """Merge a candidate with its estimate; the only place profit is computed."""
    price = float(parse_price(candidate.price_text))
    profit = compute_profit(arv, price, repairs, mov, additional_costs)
    return AnalyzedProperty(
        **candidate.model_dump(),
        purchase_price=price,
        arv=arv,
        repairs=repairs,
        mov=mov,
        additional_costs=additional_costs,
        profit=profit,
        roi_pct=compute_roi_pct(profit, price, repairs),
        analysis_note=note,
        analysis_source=source,
    )


# -----------------------------
# Public API
# -----------------------------


def fallback_analysis(candidate: ListingCandidate) -> AnalyzedProperty:
    price = parse_price(candidate.price_text)
    arv = price * FALLBACK_ARV_RATE
    return build_analyzed(
        candidate,
        arv=arv,
        repairs=price * FALLBACK_REPAIRS_RATE,
        mov=arv * MOV_RATE,
        additional_costs=price * ADDITIONAL_COSTS_RATE,
        note=FALLBACK_NOTE,
        source="fallback",
    )


def estimate_from_model(candidate: ListingCandidate, data: dict[str, Any]) -> AnalyzedProperty:
    price = parse_price(candidate.price_text)
    arv = coerce_amount(data.get("arv")) or 0.0
    repairs = coerce_amount(data.get("repairs")) or 0.0
    mov = coerce_amount(data.get("mov"))
    additional = coerce_amount(data.get("additionalCosts"))
    return build_analyzed(
        candidate,
        arv=arv,
        repairs=repairs,
        mov=mov if mov is not None else arv * MOV_RATE,
        additional_costs=additional if additional is not None else price * ADDITIONAL_COSTS_RATE,
        note=str(data.get("analysis") or ""),
        source="model",
    )


def analyze_property(candidate: ListingCandidate, query: str, provider: ChatProvider) -> AnalyzedProperty:
    """Model-backed estimate for one listing; deterministic fallback on any failure."""
    price = parse_price(candidate.price_text)
    prompt = _PROMPT.format(
        title=candidate.title,
        price=price,
        location=candidate.address or "Unknown",
        query=query,
    )
    try:
        text = provider.complete(system_user(_SYSTEM, prompt), json_mode=True, temperature=0.7)
        data = parse_json_object(text, label="analysis")
        return estimate_from_model(candidate, data)
    except Exception as e:  # noqa: BLE001 - one listing never aborts the run
        logger.warning("analysis degraded for %r: %s", candidate.title, e)
        return fallback_analysis(candidate)


__all__ = [
    "FALLBACK_NOTE",
    "analyze_property",
    "build_analyzed",
    "coerce_amount",
    "compute_profit",
    "estimate_from_model",
    "fallback_analysis",
    "parse_price",
]
