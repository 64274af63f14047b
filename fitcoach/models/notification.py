from sqlalchemy import Column, String, Boolean, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from .base import BaseModel


class Notification(BaseModel):
    __tablename__ = "notifications"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default="general")  # reminder, activity_reminder, heart_rate_alert, sleep_alert
    is_read = Column(Boolean, default=False, nullable=False)
    data = Column("metadata", JSONB, nullable=True)  # e.g. reminder_type, priority
