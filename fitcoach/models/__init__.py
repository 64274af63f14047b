from fitcoach.models.base import Base
from fitcoach.models.user import User
from fitcoach.models.reminder_setting import ReminderSetting, ReminderType, DEFAULT_FREQUENCY_HOURS
from fitcoach.models.notification import Notification
from fitcoach.models.activity import UserActivity, UserReward, UserAchievement
from fitcoach.models.wearable import WearableConnection, WearableData
from fitcoach.models.coach import CoachConversation, CoachMessage

__all__ = [
    "Base",
    "User",
    "ReminderSetting",
    "ReminderType",
    "DEFAULT_FREQUENCY_HOURS",
    "Notification",
    "UserActivity",
    "UserReward",
    "UserAchievement",
    "WearableConnection",
    "WearableData",
    "CoachConversation",
    "CoachMessage",
]
