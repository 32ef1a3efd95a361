"""OpenAI provider plumbing for llm_procedures."""

from .access import ResolvedAccess, resolve_access
from .openai import OpenAITransport, build_chat_payload

__all__ = [
    "OpenAITransport",
    "ResolvedAccess",
    "build_chat_payload",
    "resolve_access",
]
