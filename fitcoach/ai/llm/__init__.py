"""
LLM Module

Text generation backends for notification messages and the AI coach.
The active backend is chosen by LLM_PROVIDER.
"""

from typing import Optional

from fitcoach.ai.llm.base import TextGenerator, GenerationError
from fitcoach.ai.llm.gateway_client import GatewayTextGenerator
from fitcoach.core.config import settings

_generator: Optional[TextGenerator] = None


def get_text_generator() -> TextGenerator:
    """Return the configured text generator (singleton)."""
    global _generator

    if _generator is None:
        if settings.LLM_PROVIDER == "gemini":
            from fitcoach.ai.llm.gemini_client import GeminiTextGenerator
            _generator = GeminiTextGenerator()
        else:
            _generator = GatewayTextGenerator()

    return _generator


__all__ = [
    "TextGenerator",
    "GenerationError",
    "GatewayTextGenerator",
    "get_text_generator",
]
