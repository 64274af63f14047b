"""
User Repository

Data access layer for User model.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.repositories.base import BaseRepository
from fitcoach.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_fcm_token(self, user_id: UUID) -> Optional[str]:
        result = await self.db.execute(
            select(User.fcm_token).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def ensure_exists(self, user_id: UUID) -> User:
        """Create the local mirror row for a user seen in a valid token."""
        user = await self.get_by_id(user_id)
        if user is None:
            user = await self.create(id=user_id)
        return user
