import enum

from sqlalchemy import Column, String, Boolean, Integer, ForeignKey, DateTime, Time, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import BaseModel


class ReminderType(str, enum.Enum):
    WORKOUT = "workout"
    HYDRATION = "hydration"
    REST = "rest"


# Seeded the first time a user opens reminder settings
DEFAULT_FREQUENCY_HOURS = {
    ReminderType.WORKOUT: 24,
    ReminderType.HYDRATION: 4,
    ReminderType.REST: 168,
}


class ReminderSetting(BaseModel):
    __tablename__ = "user_reminder_settings"
    __table_args__ = (
        UniqueConstraint("user_id", "reminder_type", name="uq_reminder_settings_user_type"),
    )

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reminder_type = Column(String(20), nullable=False)  # workout, hydration, rest
    enabled = Column(Boolean, default=True, nullable=False)
    frequency_hours = Column(Integer, default=24, nullable=False)
    preferred_time = Column(Time, nullable=True)
    last_sent_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="reminder_settings")
