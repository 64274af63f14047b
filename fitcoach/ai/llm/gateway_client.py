"""
LLM Gateway Client

Talks to an OpenAI-compatible chat-completions endpoint:

    POST {LLM_GATEWAY_URL}
    Authorization: Bearer {LLM_GATEWAY_API_KEY}
    {"model": ..., "messages": [...], "max_completion_tokens": ...}

The generated text is read from choices[0].message.content.
"""

import logging
from typing import Dict, List, Optional

import httpx

from fitcoach.ai.llm.base import TextGenerator, GenerationError
from fitcoach.core.config import settings

logger = logging.getLogger(__name__)


class GatewayTextGenerator(TextGenerator):
    """Text generation through the chat-completions gateway."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.LLM_GATEWAY_API_KEY
        self.url = url or settings.LLM_GATEWAY_URL
        self.model = model or settings.LLM_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        self._transport = transport

    async def chat(
        self,
        system_prompt: str,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
    ) -> str:
        if not self.api_key:
            raise GenerationError("LLM_GATEWAY_API_KEY not configured")

        payload = {
            "model": self.model,
            "messages": [{"role": "system", "content": system_prompt}, *messages],
        }
        if max_tokens:
            payload["max_completion_tokens"] = max_tokens

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"LLM gateway request failed: {e}")
            raise GenerationError(f"LLM gateway request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"LLM gateway error: {response.status_code} {response.text[:200]}")
            raise GenerationError(f"LLM gateway error: {response.status_code}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationError("LLM gateway returned an unexpected payload") from e

        if not content or not content.strip():
            raise GenerationError("LLM gateway returned empty content")

        return content.strip()
