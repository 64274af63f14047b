"""
Reminder Schemas

Pydantic models for reminder settings and the scheduled reminder trigger.
"""

from datetime import datetime, time
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fitcoach.models.reminder_setting import ReminderType


class ReminderSettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    reminder_type: ReminderType
    enabled: bool
    frequency_hours: int
    preferred_time: Optional[time] = None
    last_sent_at: Optional[datetime] = None


class ReminderSettingUpdate(BaseModel):
    """Fields a user may change. Omitted fields are left untouched."""
    enabled: Optional[bool] = None
    frequency_hours: Optional[int] = Field(
        None,
        ge=1,
        le=24 * 365,
        description="Minimum hours between two reminders of this type"
    )
    preferred_time: Optional[time] = None


class SmartReminderRunResponse(BaseModel):
    success: bool
    sentCount: int
    totalChecked: int
