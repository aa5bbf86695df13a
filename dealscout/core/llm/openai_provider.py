# dealscout/core/llm/openai_provider.py
"""
OpenAI-compatible Chat Provider

Purpose
-------
Production `ChatProvider` backed by the `openai` SDK. Any OpenAI-compatible
endpoint works by setting `base_url`; the default points at Groq's
compatibility endpoint.

Design
------
- Fails fast with ConfigurationError when no API key is configured.
- Caller-imposed timeout on every call; the client never retries.
- JSON mode maps to `response_format={"type": "json_object"}`.
"""

from __future__ import annotations

import logging

from ...config import Settings
from ..errors import ConfigurationError
from .provider_base import ChatMessage, ChatProvider

logger = logging.getLogger(__name__)


class OpenAIChatProvider(ChatProvider):
    def __init__(self, settings: Settings) -> None:
        api_key = settings.require_llm_key()
        try:
            from openai import OpenAI
        except ImportError as e:  # pragma: no cover
            raise ConfigurationError("OpenAI SDK not available. Install `openai>=1.45`.") from e

        self._client = OpenAI(
            api_key=api_key,
            base_url=settings.llm_base_url or None,
            timeout=settings.llm_timeout_s,
            max_retries=0,
        )
        self._model = settings.llm_model

    @property
    def model(self) -> str:
        return self._model

    def complete(
        self,
        messages: list[ChatMessage],
        *,
        json_mode: bool = False,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        kwargs: dict = {
            "model": self._model,
            "messages": messages,
            "temperature": temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        if max_tokens is not None:
            kwargs["max_completion_tokens"] = max_tokens

        resp = self._client.chat.completions.create(**kwargs)
        content = resp.choices[0].message.content or ""
        logger.debug("model=%s json_mode=%s chars=%d", self._model, json_mode, len(content))
        return content


__all__ = ["OpenAIChatProvider"]
