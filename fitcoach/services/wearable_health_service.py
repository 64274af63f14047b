"""
Wearable Health Service

Checks a user's freshly synced wearable metrics against fixed thresholds
and writes an AI-worded notification for each one that is breached.

Thresholds (configurable):
- steps: after STEP_ALERT_HOUR local time with fewer than STEP_ALERT_MIN_STEPS
- heart rate: latest reading above HEART_RATE_HIGH_BPM (high priority)
  or below HEART_RATE_LOW_BPM (medium priority)
- sleep: last night's sleep below SLEEP_MIN_HOURS

There is no cooldown state: running the analysis twice on the same day
with the same breached thresholds creates the alerts twice.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID
from zoneinfo import ZoneInfo

from fitcoach.ai.prompts.reminder_prompts import HEALTH_ALERT_TITLES, HEALTH_ALERT_CONTEXTS
from fitcoach.core.config import settings
from fitcoach.services.notification_service import HealthAlert, NotificationComposer
from fitcoach.services.snapshot import HealthMetrics, local_day_bounds, summarize_metrics

logger = logging.getLogger(__name__)


_RESULT_MESSAGES = {
    "es": "Creadas {count} notificaciones inteligentes",
    "en": "Created {count} smart notifications",
}


@dataclass
class HealthAnalysisResult:
    notifications_created: int = 0
    alerts: List[HealthAlert] = field(default_factory=list)

    def message(self, locale: str) -> str:
        template = _RESULT_MESSAGES.get(locale, _RESULT_MESSAGES["en"])
        return template.format(count=self.notifications_created)


def _alert(kind: str, notification_type: str, priority: str, value: float, locale: str) -> HealthAlert:
    return HealthAlert(
        kind=kind,
        notification_type=notification_type,
        title=HEALTH_ALERT_TITLES[locale][kind],
        context=HEALTH_ALERT_CONTEXTS[locale][kind].format(value=value),
        priority=priority,
        value=value,
    )


def evaluate_health_alerts(
    metrics: HealthMetrics,
    local_hour: int,
    locale: Optional[str] = None,
) -> List[HealthAlert]:
    """Return one HealthAlert per breached threshold."""
    locale = locale or settings.NOTIFICATION_LOCALE
    alerts = []

    if local_hour >= settings.STEP_ALERT_HOUR and metrics.steps < settings.STEP_ALERT_MIN_STEPS:
        alerts.append(_alert("low_steps", "activity_reminder", "medium", metrics.steps, locale))

    hr = metrics.latest_heart_rate
    if hr is not None:
        if hr > settings.HEART_RATE_HIGH_BPM:
            alerts.append(_alert("high_heart_rate", "heart_rate_alert", "high", hr, locale))
        elif hr < settings.HEART_RATE_LOW_BPM:
            alerts.append(_alert("low_heart_rate", "heart_rate_alert", "medium", hr, locale))

    sleep = metrics.last_sleep_hours
    if sleep is not None and sleep < settings.SLEEP_MIN_HOURS:
        alerts.append(_alert("short_sleep", "sleep_alert", "medium", sleep, locale))

    return alerts


class WearableHealthService:
    """Runs the threshold checks for one user after a wearable sync."""

    def __init__(self, wearable_repo, composer: NotificationComposer):
        self.wearable_repo = wearable_repo
        self.composer = composer

    async def load_metrics(self, user_id: UUID, now: datetime) -> HealthMetrics:
        today, yesterday = local_day_bounds(now)

        today_rows = await self.wearable_repo.get_readings(user_id, since=today)
        sleep_rows = await self.wearable_repo.get_readings(
            user_id, since=yesterday, until=today, data_type="sleep"
        )
        return summarize_metrics(today_rows, sleep_rows)

    async def analyze(self, user_id: UUID, now: Optional[datetime] = None) -> HealthAnalysisResult:
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        logger.info(f"Analyzing health data for user: {user_id}")

        metrics = await self.load_metrics(user_id, now)
        local_hour = now.astimezone(ZoneInfo(settings.TIMEZONE)).hour
        alerts = evaluate_health_alerts(metrics, local_hour, self.composer.locale)

        result = HealthAnalysisResult(alerts=alerts)
        for alert in alerts:
            notification = await self.composer.compose_health_alert(user_id, alert)
            if notification is not None:
                result.notifications_created += 1

        logger.info(
            f"Health analysis for user {user_id}: {len(alerts)} alerts, "
            f"{result.notifications_created} notifications created"
        )
        return result
