# dealscout/core/llm/json_output.py
"""
Shared handling for JSON-shaped model output.

Every generative call site treats model text as untrusted:
  1) strip code fences and junk characters
  2) trim to the outermost JSON object
  3) parse, require a dict, check required keys
  4) otherwise raise ModelOutputError so the caller applies its own fallback
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from typing import Any

from ..errors import ModelOutputError
from ..logs import log_raw_preview

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\n?```")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` wrappers anywhere in the text."""
    s = _FENCE_OPEN_RE.sub("", text)
    s = _FENCE_CLOSE_RE.sub("", s)
    return s.strip()


def sanitize_json_like(text: str) -> str:
    """Best-effort cleanup of model output into strict JSON.

    - Strips code fences and zero-width characters
    - Trims to the outermost JSON object
    - Replaces NaN/Infinity with null
    - Removes trailing commas before '}' or ']'
    """
    s = strip_code_fences(text)
    s = s.replace("\u200b", "").replace("\ufeff", "")

    start = s.find("{")
    end = s.rfind("}")
    if start != -1 and end > start:
        s = s[start : end + 1]

    s = re.sub(r"([:\[,]\s*)-?(?:NaN|Infinity)\b", r"\1null", s)
    s = re.sub(r",\s*([}\]])", r"\1", s)
    return s


def parse_json_object(text: str | None, *, required: Iterable[str] = (), label: str = "model output") -> dict[str, Any]:
    """
    Parse model text into a dict that carries every `required` key.

    Raises:
        ModelOutputError: empty text, invalid JSON, non-object root, or missing keys.
    """
    if not text or not text.strip():
        raise ModelOutputError(f"{label}: empty response")

    cleaned = sanitize_json_like(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        log_raw_preview(logger, text, f"{label} unparseable")
        raise ModelOutputError(f"{label}: invalid JSON ({e.msg})") from e

    if not isinstance(data, dict):
        raise ModelOutputError(f"{label}: expected a JSON object, got {type(data).__name__}")

    missing = [k for k in required if k not in data]
    if missing:
        log_raw_preview(logger, text, f"{label} missing keys")
        raise ModelOutputError(f"{label}: missing keys {missing}")
    return data


__all__ = ["parse_json_object", "sanitize_json_like", "strip_code_fences"]
