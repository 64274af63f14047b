"""
Reminder Settings Repository

Data access for per-user reminder rules.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update, or_
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.repositories.base import BaseRepository
from fitcoach.models.reminder_setting import ReminderSetting, ReminderType, DEFAULT_FREQUENCY_HOURS


class ReminderSettingRepository(BaseRepository[ReminderSetting]):
    """Repository for ReminderSetting model."""

    def __init__(self, db: AsyncSession):
        super().__init__(ReminderSetting, db)

    async def get_enabled(self) -> List[ReminderSetting]:
        """
        All enabled rules across users, oldest first.

        Rows are detached from the session so a per-rule rollback during a
        run does not expire them.
        """
        result = await self.db.execute(
            select(ReminderSetting)
            .where(ReminderSetting.enabled.is_(True))
            .order_by(ReminderSetting.created_at.asc())
        )
        rows = list(result.scalars().all())
        for row in rows:
            self.db.expunge(row)
        return rows

    async def get_for_user(self, user_id: UUID) -> List[ReminderSetting]:
        result = await self.db.execute(
            select(ReminderSetting)
            .where(ReminderSetting.user_id == user_id)
            .order_by(ReminderSetting.created_at.asc())
        )
        return list(result.scalars().all())

    async def create_defaults(self, user_id: UUID) -> List[ReminderSetting]:
        """Insert one enabled rule per reminder type with default frequency."""
        rows = [
            ReminderSetting(
                user_id=user_id,
                reminder_type=reminder_type.value,
                enabled=True,
                frequency_hours=DEFAULT_FREQUENCY_HOURS[reminder_type],
            )
            for reminder_type in ReminderType
        ]
        self.db.add_all(rows)
        await self.db.commit()
        for row in rows:
            await self.db.refresh(row)
        return rows

    async def mark_sent(self, setting_id: UUID, sent_at: datetime) -> bool:
        """
        Stamp last_sent_at, never moving it backward.

        Returns False when the stored value is already at or after sent_at.
        """
        result = await self.db.execute(
            update(ReminderSetting)
            .where(
                ReminderSetting.id == setting_id,
                or_(
                    ReminderSetting.last_sent_at.is_(None),
                    ReminderSetting.last_sent_at < sent_at,
                ),
            )
            .values(last_sent_at=sent_at)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        return result.rowcount > 0

    async def get_user_setting(self, setting_id: UUID, user_id: UUID) -> Optional[ReminderSetting]:
        result = await self.db.execute(
            select(ReminderSetting).where(
                ReminderSetting.id == setting_id,
                ReminderSetting.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()
