"""
Wearable Repository

Data access for provider connections and synced metric rows.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.repositories.base import BaseRepository
from fitcoach.models.wearable import WearableConnection, WearableData


class WearableRepository(BaseRepository[WearableConnection]):
    """Repository for WearableConnection and WearableData."""

    def __init__(self, db: AsyncSession):
        super().__init__(WearableConnection, db)

    async def get_user_connection(self, connection_id: UUID, user_id: UUID) -> Optional[WearableConnection]:
        result = await self.db.execute(
            select(WearableConnection).where(
                WearableConnection.id == connection_id,
                WearableConnection.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_provider(self, user_id: UUID, provider: str) -> Optional[WearableConnection]:
        result = await self.db.execute(
            select(WearableConnection).where(
                WearableConnection.user_id == user_id,
                WearableConnection.provider == provider,
            )
        )
        return result.scalars().first()

    async def upsert_connection(self, user_id: UUID, provider: str, **fields) -> WearableConnection:
        """Update the user's connection for provider, or create it."""
        connection = await self.get_by_provider(user_id, provider)
        if connection is None:
            return await self.create(user_id=user_id, provider=provider, **fields)
        return await self.update(connection.id, **fields)

    async def touch_last_sync(self, connection_id: UUID, synced_at: datetime) -> None:
        await self.db.execute(
            update(WearableConnection)
            .where(WearableConnection.id == connection_id)
            .values(last_sync_at=synced_at)
        )
        await self.db.commit()

    async def add_readings(self, rows: List[Dict[str, Any]]) -> int:
        self.db.add_all([WearableData(**row) for row in rows])
        await self.db.commit()
        return len(rows)

    async def get_readings(
        self,
        user_id: UUID,
        since: datetime,
        until: Optional[datetime] = None,
        data_type: Optional[str] = None,
    ) -> List[WearableData]:
        """Readings in [since, until], ordered by recorded_at ascending."""
        stmt = select(WearableData).where(
            WearableData.user_id == user_id,
            WearableData.recorded_at >= since,
        )
        if until is not None:
            stmt = stmt.where(WearableData.recorded_at <= until)
        if data_type is not None:
            stmt = stmt.where(WearableData.data_type == data_type)

        result = await self.db.execute(stmt.order_by(WearableData.recorded_at.asc()))
        return list(result.scalars().all())
