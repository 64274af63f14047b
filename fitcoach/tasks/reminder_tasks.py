"""
Reminder Tasks

Background jobs run by the ARQ worker:

- send_smart_reminders: periodic run over all enabled reminder rules
  (registered as a cron entry in worker.py)
- analyze_wearable_health: health alert analysis for one user, enqueued
  after a wearable sync
"""

import logging
from typing import Any, Dict
from uuid import UUID

from fitcoach.api.deps import build_smart_reminder_service, build_wearable_health_service
from fitcoach.core.config import settings
from fitcoach.db.database import AsyncSessionLocal

logger = logging.getLogger(__name__)


async def send_smart_reminders(ctx: Dict[str, Any]) -> Dict[str, Any]:
    job_id = ctx.get("job_id", "unknown")
    logger.info(f"Running smart reminders (job: {job_id})")

    async with AsyncSessionLocal() as session:
        result = await build_smart_reminder_service(session).run()

    return {
        "success": True,
        "sentCount": result.sent_count,
        "totalChecked": result.total_checked,
    }


async def analyze_wearable_health(ctx: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    job_id = ctx.get("job_id", "unknown")
    logger.info(f"Analyzing wearable health for user {user_id} (job: {job_id})")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.error(f"Invalid user ID: {user_id}")
        return {"success": False, "error": "Invalid user ID"}

    async with AsyncSessionLocal() as session:
        result = await build_wearable_health_service(session).analyze(user_uuid)

    return {
        "success": True,
        "analyzed": True,
        "notifications_created": result.notifications_created,
        "message": result.message(settings.NOTIFICATION_LOCALE),
    }
