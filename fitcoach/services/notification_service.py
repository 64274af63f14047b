"""
Notification Service

Turns a due reminder rule or a breached health threshold into a persisted
notification:

1. Build the prompt from the user's activity snapshot
2. Ask the text generator for a short message
3. Insert the notification with a fixed, category-specific title
4. Stamp the rule's last_sent_at (scheduled reminders only)
5. Optionally push it to the user's device via Firebase Cloud Messaging

A failed generation skips the item: nothing is written and the rule stays
eligible for the next run.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

import firebase_admin
from firebase_admin import credentials, messaging

from fitcoach.ai.llm.base import TextGenerator, GenerationError
from fitcoach.ai.prompts.reminder_prompts import (
    REMINDER_TITLES,
    build_reminder_system_prompt,
    build_reminder_prompt,
    build_health_system_prompt,
    build_health_prompt,
)
from fitcoach.core.config import settings
from fitcoach.services.snapshot import ActivitySnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthAlert:
    """A breached wearable threshold, ready to be composed."""
    kind: str               # low_steps, high_heart_rate, low_heart_rate, short_sleep
    notification_type: str  # activity_reminder, heart_rate_alert, sleep_alert
    title: str
    context: str
    priority: str           # medium, high
    value: float


# ============================================================
# PUSH DELIVERY (Firebase Cloud Messaging)
# ============================================================

_firebase_initialized = False


def _ensure_firebase():
    """Initialize Firebase Admin SDK once."""
    global _firebase_initialized
    if _firebase_initialized:
        return
    try:
        key_path = settings.FIREBASE_SERVICE_ACCOUNT_KEY_PATH
        if key_path:
            cred = credentials.Certificate(key_path)
            firebase_admin.initialize_app(cred)
        else:
            firebase_admin.initialize_app()
        _firebase_initialized = True
        logger.info("Firebase Admin SDK initialized")
    except Exception as e:
        logger.warning("Firebase Admin SDK init failed (push disabled): %s", e)


async def send_push_notification(
    fcm_token: str,
    title: str,
    body: str,
    data: Optional[Dict[str, str]] = None,
) -> bool:
    """Send a push notification to a single device."""
    _ensure_firebase()
    if not _firebase_initialized:
        return False

    message = messaging.Message(
        notification=messaging.Notification(title=title, body=body),
        data=data or {},
        token=fcm_token,
    )
    try:
        await asyncio.to_thread(messaging.send, message)
        logger.info("Push sent to token %s...", fcm_token[:20])
        return True
    except messaging.UnregisteredError:
        logger.warning("FCM token expired/unregistered: %s...", fcm_token[:20])
        return False
    except Exception as e:
        logger.error("Failed to send push: %s", e)
        return False


class PushNotifier:
    """Looks up the user's device token and pushes a persisted notification."""

    def __init__(self, user_repo):
        self.user_repo = user_repo

    async def __call__(self, user_id: UUID, title: str, body: str, data: Dict[str, str]) -> bool:
        token = await self.user_repo.get_fcm_token(user_id)
        if not token:
            return False
        return await send_push_notification(token, title, body, data)


# ============================================================
# COMPOSER
# ============================================================

class NotificationComposer:
    """
    Builds and persists AI-written notifications.

    Collaborators are injected so the prompt assembly and persistence
    rules can be exercised without a database or network.
    """

    def __init__(
        self,
        notification_repo,
        generator: TextGenerator,
        reminder_repo=None,
        push_notifier: Optional[PushNotifier] = None,
        locale: Optional[str] = None,
    ):
        self.notification_repo = notification_repo
        self.generator = generator
        self.reminder_repo = reminder_repo
        self.push_notifier = push_notifier
        self.locale = locale or settings.NOTIFICATION_LOCALE

    async def _generate(self, system_prompt: str, user_prompt: str, label: str) -> Optional[str]:
        try:
            return await self.generator.generate(
                system_prompt,
                user_prompt,
                max_tokens=settings.LLM_MAX_TOKENS,
            )
        except GenerationError as e:
            logger.error(f"Skipping {label}: text generation failed: {e}")
        except Exception:
            logger.exception(f"Skipping {label}: unexpected text generation error")
        return None

    async def compose_reminder(self, rule, snapshot: ActivitySnapshot, now: datetime):
        """
        Generate, persist and stamp one scheduled reminder.

        Returns:
            The created notification, or None if generation failed
        """
        reminder_type = rule.reminder_type
        label = f"{reminder_type} reminder for user {rule.user_id}"

        message = await self._generate(
            build_reminder_system_prompt(self.locale),
            build_reminder_prompt(reminder_type, snapshot),
            label,
        )
        if message is None:
            return None

        titles = REMINDER_TITLES[self.locale]
        notification = await self.notification_repo.create_notification(
            user_id=rule.user_id,
            notification_type="reminder",
            title=titles.get(reminder_type, titles["workout"]),
            body=message,
            data={
                "reminder_type": reminder_type,
                "reminder_id": str(rule.id),
                "priority": "normal",
                "ai_generated": True,
            },
        )

        if self.reminder_repo is not None:
            await self.reminder_repo.mark_sent(rule.id, now)

        await self._push(notification)
        logger.info(f"Sent {label}")
        return notification

    async def compose_health_alert(self, user_id: UUID, alert: HealthAlert):
        """
        Generate and persist one health alert.

        Returns:
            The created notification, or None if generation failed
        """
        label = f"{alert.notification_type} for user {user_id}"

        message = await self._generate(
            build_health_system_prompt(self.locale),
            build_health_prompt(alert.title, alert.context, alert.priority),
            label,
        )
        if message is None:
            return None

        notification = await self.notification_repo.create_notification(
            user_id=user_id,
            notification_type=alert.notification_type,
            title=alert.title,
            body=message,
            data={
                "context": alert.context,
                "priority": alert.priority,
                "ai_generated": True,
            },
        )

        await self._push(notification)
        logger.info(f"Created {label}")
        return notification

    async def _push(self, notification) -> None:
        if self.push_notifier is None:
            return
        try:
            await self.push_notifier(
                notification.user_id,
                notification.title,
                notification.body,
                {"type": notification.type, "notification_id": str(notification.id)},
            )
        except Exception as e:
            logger.warning("Push delivery failed for notification %s: %s", notification.id, e)
