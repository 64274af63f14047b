"""AI Prompts Module"""

from fitcoach.ai.prompts.reminder_prompts import (
    REMINDER_TITLES,
    HEALTH_ALERT_TITLES,
    HEALTH_ALERT_CONTEXTS,
    build_reminder_system_prompt,
    build_reminder_prompt,
    build_health_system_prompt,
    build_health_prompt,
)
from fitcoach.ai.prompts.coach_prompts import build_coach_system_prompt

__all__ = [
    "REMINDER_TITLES",
    "HEALTH_ALERT_TITLES",
    "HEALTH_ALERT_CONTEXTS",
    "build_reminder_system_prompt",
    "build_reminder_prompt",
    "build_health_system_prompt",
    "build_health_prompt",
    "build_coach_system_prompt",
]
