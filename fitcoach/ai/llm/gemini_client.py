"""
Google Gemini Client

Alternative text generation backend using the google-genai package,
selected with LLM_PROVIDER=gemini.
"""

import logging
from typing import Dict, List, Optional

from google import genai
from google.genai import types

from fitcoach.ai.llm.base import TextGenerator, GenerationError
from fitcoach.core.config import settings

logger = logging.getLogger(__name__)


_client: Optional[genai.Client] = None


def get_client() -> genai.Client:
    """Get or create the Gemini client."""
    global _client

    if _client is None:
        if not settings.GEMINI_API_KEY:
            raise GenerationError("GEMINI_API_KEY not configured")

        _client = genai.Client(api_key=settings.GEMINI_API_KEY)
        logger.info(f"Gemini client initialized (model: {settings.GEMINI_MODEL})")

    return _client


def format_messages_for_gemini(messages: List[Dict[str, str]]) -> List[types.Content]:
    """Convert role/content dicts to Gemini Content objects (assistant -> model)."""
    contents = []
    for msg in messages:
        role = "model" if msg["role"] == "assistant" else "user"
        contents.append(
            types.Content(role=role, parts=[types.Part(text=msg["content"])])
        )
    return contents


class GeminiTextGenerator(TextGenerator):
    """Text generation through the Gemini API."""

    async def chat(
        self,
        system_prompt: str,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
    ) -> str:
        client = get_client()

        config = types.GenerateContentConfig(
            temperature=settings.LLM_TEMPERATURE,
            max_output_tokens=max_tokens or settings.LLM_MAX_TOKENS,
            system_instruction=system_prompt,
        )

        try:
            response = await client.aio.models.generate_content(
                model=settings.GEMINI_MODEL,
                contents=format_messages_for_gemini(messages),
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise GenerationError(f"Gemini API error: {e}") from e

        text = response.text
        if not text or not text.strip():
            raise GenerationError("Gemini returned empty content")
        return text.strip()
