"""
OpenAI-compatible Chat Completions Provider

Works against any endpoint speaking the Chat Completions API
(DeepSeek, OpenAI):
- client.chat.completions.create()
- response.choices[0].message.content
"""

import logging

from openai import AsyncOpenAI

from app.services.llm.base import CompletionProvider

logger = logging.getLogger(__name__)


class OpenAIChatProvider(CompletionProvider):
    """Provider for Chat Completions API endpoints."""

    provider_name = "openai_chat"

    def __init__(self, api_key: str, base_url: str | None = None):
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def complete(
        self,
        messages: list[dict],
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 500,
    ) -> str:
        response = await self.client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        if not response.choices:
            raise ValueError("Empty response from Chat Completions API")
        content = response.choices[0].message.content or ""
        if not content:
            logger.warning("[LLM] model=%s returned an empty answer", model)

        logger.info("[LLM] model=%s answer_chars=%d", model, len(content))
        return content
