"""
Abstract base class for chat-completion providers.

Each provider implements the API-specific translation layer and returns
the first choice's text.
"""

from abc import ABC, abstractmethod


class CompletionProvider(ABC):
    """Abstract base class for all completion providers."""

    provider_name: str = "base"

    @abstractmethod
    async def complete(
        self,
        messages: list[dict],
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 500,
    ) -> str:
        """
        Send a message list to the model and return the answer text.

        Args:
            messages: List of message dicts with "role" and "content"
            model: The API model identifier (e.g., "deepseek-chat")
            temperature: Sampling temperature
            max_tokens: Maximum tokens in the response

        Returns:
            Text of the first choice ("" if the model returned no content)

        Raises:
            ValueError: If the response has no choices
        """
        ...
