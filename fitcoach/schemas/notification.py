from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    title: str
    body: str
    is_read: bool
    data: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None


class UnreadCountResponse(BaseModel):
    unread_count: int
