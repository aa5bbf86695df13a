# dealscout/core/llm/factory.py
from __future__ import annotations

from ...config import Settings
from .provider_base import ChatProvider


def build_provider(settings: Settings) -> ChatProvider:
    """
    Select the ChatProvider named by settings.

    Raises:
        ConfigurationError: openai selected without an API key.
    """
    if settings.llm_provider == "mock":
        from .mock_provider import MockChatProvider

        return MockChatProvider()

    from .openai_provider import OpenAIChatProvider

    return OpenAIChatProvider(settings)


__all__ = ["build_provider"]
