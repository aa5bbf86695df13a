# dealscout/config.py
"""
Runtime settings for dealscout.

Settings are a frozen Pydantic model. `load_settings()` reads DEALSCOUT_*
environment variables on top of the defaults; unknown variables are ignored.

Environment
-----------
DEALSCOUT_LLM_PROVIDER     : "openai" (default) | "mock"
DEALSCOUT_LLM_API_KEY      : falls back to GROQ_API_KEY, then OPENAI_API_KEY
DEALSCOUT_LLM_BASE_URL     : OpenAI-compatible endpoint (default: Groq)
DEALSCOUT_LLM_MODEL        : default "openai/gpt-oss-20b"
DEALSCOUT_LLM_TIMEOUT_S    : default 30
DEALSCOUT_SEARCH_TIMEOUT_S : default 10
DEALSCOUT_SCRAPE_TIMEOUT_S : default 15
DEALSCOUT_REQUEST_TIMEOUT_S: default 120 (whole pipeline)
DEALSCOUT_PROFIT_THRESHOLD : default 15000
DEALSCOUT_TTS_URL          : text-to-speech endpoint
DEALSCOUT_DEBUG            : read by dealscout.core.logs (DEBUG level + rotating file log)
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.errors import ConfigurationError

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseModel):
    """All tunables for one process. Caps are plain truncation points."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # --- Generative model ---
    llm_provider: Literal["openai", "mock"] = Field("openai", description="Which ChatProvider to build.")
    llm_api_key: str | None = Field(None, description="API key for the OpenAI-compatible endpoint.")
    llm_base_url: str | None = Field("https://api.groq.com/openai/v1", description="OpenAI-compatible base URL.")
    llm_model: str = Field("openai/gpt-oss-20b", description="Model identifier sent with every call.")
    llm_timeout_s: float = Field(30.0, gt=0, description="Caller-imposed timeout per generative call.")

    # --- Network ---
    search_timeout_s: float = Field(10.0, gt=0)
    scrape_timeout_s: float = Field(15.0, gt=0)
    request_timeout_s: float = Field(120.0, gt=0, description="Deadline for one full pipeline run.")
    user_agent: str = Field(BROWSER_USER_AGENT)

    # --- Caps & thresholds ---
    max_phrases: int = Field(6, ge=1)
    max_discovered_urls: int = Field(20, ge=1)
    max_unique_urls: int = Field(10, ge=1)
    max_listings: int = Field(20, ge=1)
    max_analyzed: int = Field(10, ge=1)
    profit_threshold: float = Field(15000.0)

    # --- Speech ---
    tts_url: str = Field("https://icrisstudio1.pythonanywhere.com/api/tts")
    tts_voice: str = Field("Justin")

    def require_llm_key(self) -> str:
        if not self.llm_api_key:
            raise ConfigurationError(
                "No generative model API key configured. Set DEALSCOUT_LLM_API_KEY (or GROQ_API_KEY / OPENAI_API_KEY)."
            )
        return self.llm_api_key


_ENV_FIELDS = {
    "LLM_PROVIDER": "llm_provider",
    "LLM_API_KEY": "llm_api_key",
    "LLM_BASE_URL": "llm_base_url",
    "LLM_MODEL": "llm_model",
    "LLM_TIMEOUT_S": "llm_timeout_s",
    "SEARCH_TIMEOUT_S": "search_timeout_s",
    "SCRAPE_TIMEOUT_S": "scrape_timeout_s",
    "REQUEST_TIMEOUT_S": "request_timeout_s",
    "PROFIT_THRESHOLD": "profit_threshold",
    "TTS_URL": "tts_url",
    "TTS_VOICE": "tts_voice",
}


def load_settings(env_prefix: str = "DEALSCOUT_", **overrides: object) -> Settings:
    """
    Build Settings from the environment, then apply keyword overrides.

    Raises:
        ConfigurationError: if any value fails validation.
    """
    data: dict[str, object] = {}
    for suffix, field in _ENV_FIELDS.items():
        val = os.getenv(f"{env_prefix}{suffix}")
        if val is not None and val.strip() != "":
            data[field] = val.strip()

    if "llm_api_key" not in data:
        fallback_key = os.getenv("GROQ_API_KEY") or os.getenv("OPENAI_API_KEY")
        if fallback_key:
            data["llm_api_key"] = fallback_key
            # a bare OpenAI key talks to OpenAI, not the Groq default
            if not os.getenv("GROQ_API_KEY") and "llm_base_url" not in data:
                data["llm_base_url"] = None
                data.setdefault("llm_model", os.getenv("OPENAI_MODEL") or "gpt-4o-mini")

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid dealscout settings: {e}") from e


__all__ = ["Settings", "load_settings", "BROWSER_USER_AGENT"]
