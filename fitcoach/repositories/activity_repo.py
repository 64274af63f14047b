"""
Activity Repository

Read access to the activity log, rewards and achievements that make up
the context handed to the text generator.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.repositories.base import BaseRepository
from fitcoach.models.activity import UserActivity, UserReward, UserAchievement


class ActivityRepository(BaseRepository[UserActivity]):
    """Repository for UserActivity, UserReward and UserAchievement."""

    def __init__(self, db: AsyncSession):
        super().__init__(UserActivity, db)

    async def get_recent_activities(self, user_id: UUID, limit: int = 10) -> List[UserActivity]:
        """Most recent activities, newest first."""
        result = await self.db.execute(
            select(UserActivity)
            .where(UserActivity.user_id == user_id)
            .order_by(UserActivity.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_rewards(self, user_id: UUID) -> Optional[UserReward]:
        result = await self.db.execute(
            select(UserReward).where(UserReward.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def count_achievements(self, user_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count(UserAchievement.id)).where(UserAchievement.user_id == user_id)
        )
        return result.scalar() or 0
