# dealscout/core/normalize/location.py
"""
Location heuristic shared by query expansion, source discovery and listing
extraction. Pure and deterministic: same text in, same location out.
"""

from __future__ import annotations

import re

DEFAULT_LOCATION = "Los Angeles"

# "(in|at|near) <words>"; stops at digits and other punctuation ("under 300k")
_LOCATION_RE = re.compile(r"\b(?:in|at|near)\s+([A-Za-z\s,]+)", re.IGNORECASE)


def extract_location(text: str, default: str | None = DEFAULT_LOCATION) -> str | None:
    """
    Return the words following the first "in"/"at"/"near" in `text`.

    Trailing whitespace and commas are trimmed. Returns `default` when no
    location phrase is present.
    """
    m = _LOCATION_RE.search(text or "")
    if not m:
        return default
    loc = " ".join(m.group(1).split()).strip(" ,")
    return loc or default


__all__ = ["DEFAULT_LOCATION", "extract_location"]
