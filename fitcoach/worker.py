"""
ARQ Worker Configuration

Running the Worker:
------------------
    arq fitcoach.worker.WorkerSettings

The worker executes queued wearable health analyses and triggers the
smart-reminder run once an hour (at REMINDER_CRON_MINUTE). Each run is
an independent, stateless pass; which rules fire is decided entirely by
their stored last_sent_at and frequency.
"""

import logging
from typing import Any, Dict

from arq import cron

from fitcoach.core.config import settings
from fitcoach.db.redis import get_arq_redis_settings
from fitcoach.tasks import send_smart_reminders, analyze_wearable_health

# ============================================================
# Logging Configuration
# ============================================================

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def startup(ctx: Dict[str, Any]) -> None:
    logger.info("ARQ Worker starting up...")


async def shutdown(ctx: Dict[str, Any]) -> None:
    logger.info("ARQ Worker shutdown complete")


class WorkerSettings:
    """
    ARQ Worker settings.

    This class is discovered by ARQ when you run:
        arq fitcoach.worker.WorkerSettings
    """

    functions = [
        analyze_wearable_health,
        send_smart_reminders,
    ]

    cron_jobs = [
        cron(send_smart_reminders, minute={settings.REMINDER_CRON_MINUTE}, run_at_startup=False),
    ]

    redis_settings = get_arq_redis_settings()

    on_startup = startup
    on_shutdown = shutdown

    job_timeout = 300
    keep_result = 3600
    # No retries: a failed run is simply picked up by the next tick
    max_tries = 1

    max_jobs = 5
    poll_delay = 0.5

    queue_name = "arq:queue"
    health_check_interval = 10
