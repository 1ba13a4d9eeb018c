"""
Completion provider layer.

A single abstraction over chat-completion APIs; the DeepSeek endpoint is
reached through the OpenAI-compatible provider.
"""

from app.services.llm.base import CompletionProvider
from app.services.llm.openai_chat import OpenAIChatProvider

__all__ = [
    "CompletionProvider",
    "OpenAIChatProvider",
]
