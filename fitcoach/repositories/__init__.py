from fitcoach.repositories.base import BaseRepository
from fitcoach.repositories.user_repo import UserRepository
from fitcoach.repositories.reminder_repo import ReminderSettingRepository
from fitcoach.repositories.notification_repo import NotificationRepository
from fitcoach.repositories.activity_repo import ActivityRepository
from fitcoach.repositories.wearable_repo import WearableRepository
from fitcoach.repositories.coach_repo import CoachRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ReminderSettingRepository",
    "NotificationRepository",
    "ActivityRepository",
    "WearableRepository",
    "CoachRepository",
]
