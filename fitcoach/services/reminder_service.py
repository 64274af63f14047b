"""
Reminder Service

Scheduled smart-reminder run and the per-user reminder settings.

Scheduled run:
-------------
1. Load every enabled rule
2. Keep the ones that are due (see eligibility.is_due)
3. For each due rule, build the user's activity snapshot and compose
4. A failed generation, snapshot read or insert skips that rule; the run continues.
   Only a failure to load the rules fails the whole run.

The run is stateless and re-entrant. Recurrence comes from whoever calls
it (the worker cron entry or an external scheduler hitting the endpoint).
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from fitcoach.models.reminder_setting import ReminderSetting
from fitcoach.schemas.reminder import ReminderSettingUpdate
from fitcoach.services.eligibility import is_due
from fitcoach.services.notification_service import NotificationComposer
from fitcoach.services.snapshot import build_activity_snapshot

logger = logging.getLogger(__name__)


class ReminderServiceError(Exception):
    """Base exception for reminder service errors."""
    pass


class ReminderSettingNotFoundError(ReminderServiceError):
    """Reminder setting not found or owned by another user."""
    pass


@dataclass
class ReminderRunResult:
    total_checked: int = 0
    due_count: int = 0
    sent_count: int = 0


class SmartReminderService:
    """Evaluates all enabled reminder rules and sends the due ones."""

    def __init__(self, reminder_repo, activity_repo, composer: NotificationComposer):
        self.reminder_repo = reminder_repo
        self.activity_repo = activity_repo
        self.composer = composer

    async def run(self, now: Optional[datetime] = None) -> ReminderRunResult:
        now = now or datetime.now(timezone.utc)
        logger.info("Starting smart reminders check...")

        rules = await self.reminder_repo.get_enabled()
        logger.info(f"Found {len(rules)} active reminder settings")

        result = ReminderRunResult(total_checked=len(rules))

        for rule in rules:
            if not is_due(rule, now):
                continue
            result.due_count += 1

            try:
                snapshot = await build_activity_snapshot(self.activity_repo, rule.user_id)
                notification = await self.composer.compose_reminder(rule, snapshot, now)
            except Exception:
                logger.exception(f"Skipping {rule.reminder_type} reminder {rule.id} for user {rule.user_id}")
                await self.reminder_repo.rollback()
                continue

            if notification is not None:
                result.sent_count += 1

        logger.info(
            f"Smart reminders done: {result.sent_count} sent, "
            f"{result.due_count} due, {result.total_checked} checked"
        )
        return result


class ReminderSettingsService:
    """Read and edit a user's reminder rules."""

    def __init__(self, reminder_repo):
        self.reminder_repo = reminder_repo

    async def list_settings(self, user_id: UUID) -> List[ReminderSetting]:
        """Return the user's rules, seeding the defaults on first access."""
        rows = await self.reminder_repo.get_for_user(user_id)
        if rows:
            return rows

        try:
            rows = await self.reminder_repo.create_defaults(user_id)
            logger.info(f"Seeded default reminder settings for user {user_id}")
            return rows
        except IntegrityError:
            # A concurrent request seeded them first
            await self.reminder_repo.rollback()
            return await self.reminder_repo.get_for_user(user_id)

    async def update_setting(
        self,
        setting_id: UUID,
        user_id: UUID,
        data: ReminderSettingUpdate,
    ) -> ReminderSetting:
        setting = await self.reminder_repo.get_user_setting(setting_id, user_id)
        if setting is None:
            raise ReminderSettingNotFoundError("Reminder setting not found")

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return setting

        return await self.reminder_repo.update(setting_id, **changes)
