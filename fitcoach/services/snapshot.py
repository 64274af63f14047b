"""
Activity Snapshots

Read-only bundles of recent user activity and wearable metrics, assembled
at evaluation time and handed to the prompt builders. Nothing here is
persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

from fitcoach.core.config import settings


@dataclass(frozen=True)
class ActivityEntry:
    activity_type: str
    description: Optional[str]
    points_earned: int
    created_at: Optional[datetime]


@dataclass(frozen=True)
class ActivitySnapshot:
    """Level, points and the most recent activities (newest first)."""
    level: int = 1
    total_points: int = 0
    achievements_count: int = 0
    recent_activities: List[ActivityEntry] = field(default_factory=list)

    @property
    def last_activity_at(self) -> Optional[datetime]:
        if not self.recent_activities:
            return None
        return self.recent_activities[0].created_at


@dataclass(frozen=True)
class HealthMetrics:
    """
    Today's wearable metrics for one user.

    steps: sum of today's step rows
    latest_heart_rate: most recent heart-rate value today, if any
    last_sleep_hours: most recent sleep value recorded during the previous day
    """
    steps: float = 0
    latest_heart_rate: Optional[float] = None
    last_sleep_hours: Optional[float] = None


async def build_activity_snapshot(activity_repo, user_id, limit: int = None) -> ActivitySnapshot:
    """Gather recent activities, rewards and achievement count for a user."""
    activities = await activity_repo.get_recent_activities(
        user_id, limit=limit or settings.RECENT_ACTIVITY_LIMIT
    )
    rewards = await activity_repo.get_rewards(user_id)
    achievements = await activity_repo.count_achievements(user_id)

    return ActivitySnapshot(
        level=rewards.level if rewards else 1,
        total_points=rewards.total_points if rewards else 0,
        achievements_count=achievements,
        recent_activities=[
            ActivityEntry(
                activity_type=a.activity_type,
                description=a.description,
                points_earned=a.points_earned or 0,
                created_at=a.created_at,
            )
            for a in activities
        ],
    )


def local_day_bounds(now: datetime, tz_name: str = None):
    """
    Return (today_midnight, yesterday_midnight) in the configured timezone,
    both timezone-aware.
    """
    tz = ZoneInfo(tz_name or settings.TIMEZONE)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local_now = now.astimezone(tz)
    today = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return today, today - timedelta(days=1)


def summarize_metrics(today_rows: Sequence, sleep_rows: Sequence) -> HealthMetrics:
    """
    Reduce wearable rows to HealthMetrics.

    Both sequences must be ordered by recorded_at ascending.
    """
    steps = sum(_number(r.value) for r in today_rows if r.data_type == "steps")

    heart_rates = [r for r in today_rows if r.data_type == "heart_rate"]
    latest_hr = _number(heart_rates[-1].value) if heart_rates else None

    sleeps = [r for r in sleep_rows if r.data_type == "sleep"]
    last_sleep = _number(sleeps[-1].value) if sleeps else None

    return HealthMetrics(steps=steps, latest_heart_rate=latest_hr, last_sleep_hours=last_sleep)


def _number(value) -> float:
    if isinstance(value, Decimal):
        return float(value)
    return float(value or 0)
