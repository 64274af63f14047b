"""
Coach Repository

Conversations and messages of the AI coach chat.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.repositories.base import BaseRepository
from fitcoach.models.coach import CoachConversation, CoachMessage


class CoachRepository(BaseRepository[CoachConversation]):
    """Repository for CoachConversation and CoachMessage."""

    def __init__(self, db: AsyncSession):
        super().__init__(CoachConversation, db)

    async def get_user_conversation(self, conversation_id: UUID, user_id: UUID) -> Optional[CoachConversation]:
        result = await self.db.execute(
            select(CoachConversation).where(
                CoachConversation.id == conversation_id,
                CoachConversation.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_messages(self, conversation_id: UUID) -> List[CoachMessage]:
        """Messages in chronological order."""
        result = await self.db.execute(
            select(CoachMessage)
            .where(CoachMessage.conversation_id == conversation_id)
            .order_by(CoachMessage.created_at.asc())
        )
        return list(result.scalars().all())

    async def add_exchange(self, conversation_id: UUID, user_content: str, assistant_content: str) -> None:
        """Persist a user turn and the assistant reply together."""
        self.db.add_all([
            CoachMessage(conversation_id=conversation_id, role="user", content=user_content),
            CoachMessage(conversation_id=conversation_id, role="assistant", content=assistant_content),
        ])
        await self.db.commit()
