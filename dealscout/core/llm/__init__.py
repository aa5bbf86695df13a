# dealscout/core/llm/__init__.py
from .factory import build_provider
from .json_output import parse_json_object, sanitize_json_like, strip_code_fences
from .provider_base import ChatMessage, ChatProvider, system_user, user_only

__all__ = [
    "ChatMessage",
    "ChatProvider",
    "build_provider",
    "parse_json_object",
    "sanitize_json_like",
    "strip_code_fences",
    "system_user",
    "user_only",
]
