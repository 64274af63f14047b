"""
Text Generator Abstract Base Class

Every backend that writes notification text or coach replies implements
this interface, so the services that assemble prompts and persist results
never talk to a vendor SDK or HTTP endpoint directly.

Pattern: Strategy Pattern
-------------------------
- GatewayTextGenerator: OpenAI-compatible chat-completions endpoint (httpx)
- GeminiTextGenerator: Google Gemini through the google-genai SDK

Tests substitute a stub generator implementing the same two methods.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class GenerationError(Exception):
    """
    Raised when the text generator cannot produce a message.

    Covers a missing credential, a network error, a non-success status
    and a response without content. Callers treat it as "skip this item".
    """
    pass


class TextGenerator(ABC):
    """Interface for text generation backends."""

    @abstractmethod
    async def chat(
        self,
        system_prompt: str,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Generate the next assistant turn.

        Args:
            system_prompt: Fixed instructions for the model
            messages: [{"role": "user"|"assistant", "content": "..."}]
            max_tokens: Optional cap on response length

        Returns:
            Generated text, stripped

        Raises:
            GenerationError: On any failure to obtain text
        """
        pass

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Single-turn generation: one system and one user message."""
        return await self.chat(
            system_prompt,
            [{"role": "user", "content": user_prompt}],
            max_tokens=max_tokens,
        )
