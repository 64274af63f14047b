"""
Coach Service

One turn of the AI coach chat:
1. Verify the conversation belongs to the user
2. Build the coach system prompt from level, points, achievements and activities
3. Send history + new message to the text generator
4. Persist the user message and the reply
"""

import logging
from typing import Optional
from uuid import UUID

from fitcoach.ai.llm.base import TextGenerator, GenerationError
from fitcoach.ai.prompts.coach_prompts import build_coach_system_prompt
from fitcoach.core.config import settings
from fitcoach.services.snapshot import build_activity_snapshot

logger = logging.getLogger(__name__)


class CoachServiceError(Exception):
    """Base exception for coach service errors."""
    pass


class ConversationNotFoundError(CoachServiceError):
    """Conversation not found or access denied."""
    pass


class CoachGenerationError(CoachServiceError):
    """The text generator could not produce a reply."""
    pass


class CoachService:
    """Service for AI coach conversations."""

    def __init__(self, coach_repo, activity_repo, generator: TextGenerator):
        self.coach_repo = coach_repo
        self.activity_repo = activity_repo
        self.generator = generator

    async def send_message(
        self,
        user_id: UUID,
        conversation_id: UUID,
        content: str,
        email: Optional[str] = None,
    ) -> str:
        conversation = await self.coach_repo.get_user_conversation(conversation_id, user_id)
        if conversation is None:
            raise ConversationNotFoundError("Conversation not found")

        snapshot = await build_activity_snapshot(self.activity_repo, user_id)
        history = await self.coach_repo.get_messages(conversation_id)

        messages = [{"role": m.role, "content": m.content} for m in history]
        messages.append({"role": "user", "content": content})

        try:
            reply = await self.generator.chat(
                build_coach_system_prompt(snapshot, email=email, locale=settings.NOTIFICATION_LOCALE),
                messages,
                max_tokens=settings.LLM_COACH_MAX_TOKENS,
            )
        except GenerationError as e:
            logger.error(f"AI coach generation failed: {e}")
            raise CoachGenerationError(str(e)) from e

        await self.coach_repo.add_exchange(conversation_id, content, reply)
        return reply
