# dealscout/core/llm/provider_base.py
"""
Chat Provider Interface

Purpose
-------
Provider-agnostic contract for the generative calls made by the pipeline
(classification, expansion, analysis, replies). Callers send role-tagged
messages and get raw text back; shape validation happens in the caller via
`dealscout.core.llm.json_output`.

Public API
----------
class ChatProvider(Protocol):
    def complete(self, messages, *, json_mode=False, temperature=0.7, max_tokens=None) -> str

def system_user(system: str, user: str) -> list[ChatMessage]
"""

from __future__ import annotations

from typing import Literal, Protocol, TypedDict

Role = Literal["system", "user", "assistant"]


class ChatMessage(TypedDict):
    role: Role
    content: str


class ChatProvider(Protocol):
    def complete(
        self,
        messages: list[ChatMessage],
        *,
        json_mode: bool = False,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str: ...


def system_user(system: str, user: str) -> list[ChatMessage]:
    return [{"role": "system", "content": system}, {"role": "user", "content": user}]


def user_only(user: str) -> list[ChatMessage]:
    return [{"role": "user", "content": user}]


__all__ = ["ChatMessage", "ChatProvider", "Role", "system_user", "user_only"]
