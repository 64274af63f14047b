from datetime import datetime, timezone

import pytest

from fitcoach.services.notification_service import NotificationComposer
from fitcoach.services.snapshot import HealthMetrics, local_day_bounds
from fitcoach.services.wearable_health_service import (
    HealthAnalysisResult,
    WearableHealthService,
    evaluate_health_alerts,
)
from tests.conftest import FakeNotificationRepo, FakeWearableRepo, StubGenerator, reading


def kinds(alerts):
    return [a.kind for a in alerts]


@pytest.mark.parametrize(
    "steps,hour,expected",
    [
        (3000, 19, ["low_steps"]),
        (6000, 19, []),
        (3000, 10, []),
        (4999, 18, ["low_steps"]),
        (5000, 18, []),
    ],
)
def test_step_threshold(steps, hour, expected):
    assert kinds(evaluate_health_alerts(HealthMetrics(steps=steps), hour, "es")) == expected


@pytest.mark.parametrize(
    "bpm,expected,priority",
    [
        (110, ["high_heart_rate"], "high"),
        (45, ["low_heart_rate"], "medium"),
        (100, [], None),
        (50, [], None),
        (72, [], None),
    ],
)
def test_heart_rate_bands(bpm, expected, priority):
    alerts = evaluate_health_alerts(HealthMetrics(steps=10000, latest_heart_rate=bpm), 12, "es")
    assert kinds(alerts) == expected
    if priority:
        assert alerts[0].priority == priority
        assert alerts[0].notification_type == "heart_rate_alert"


def test_short_sleep_alert():
    alerts = evaluate_health_alerts(HealthMetrics(steps=10000, last_sleep_hours=5.5), 8, "es")
    assert kinds(alerts) == ["short_sleep"]
    assert alerts[0].notification_type == "sleep_alert"
    assert alerts[0].title == "Sueño insuficiente"
    assert "5.5" in alerts[0].context


def test_no_metrics_no_alerts_before_evening():
    assert evaluate_health_alerts(HealthMetrics(), 9, "es") == []


def test_local_day_bounds_in_configured_timezone():
    now = datetime(2024, 3, 10, 3, 30, tzinfo=timezone.utc)
    today, yesterday = local_day_bounds(now, "America/Mexico_City")
    assert today.isoformat() == "2024-03-09T00:00:00-06:00"
    assert yesterday.isoformat() == "2024-03-08T00:00:00-06:00"


def test_result_message_per_locale():
    result = HealthAnalysisResult(notifications_created=2)
    assert result.message("es") == "Creadas 2 notificaciones inteligentes"
    assert result.message("en") == "Created 2 smart notifications"


def build_service(readings, generator=None):
    notification_repo = FakeNotificationRepo()
    composer = NotificationComposer(notification_repo, generator or StubGenerator(), locale="es")
    return WearableHealthService(FakeWearableRepo(readings), composer), notification_repo


async def test_analyze_creates_alert_per_breached_threshold(user_id):
    now = datetime(2024, 1, 2, 19, 0, tzinfo=timezone.utc)
    readings = [
        reading(user_id, "steps", 1200, datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)),
        reading(user_id, "steps", 1800, datetime(2024, 1, 2, 14, 0, tzinfo=timezone.utc)),
        reading(user_id, "heart_rate", 70, datetime(2024, 1, 2, 10, 0, tzinfo=timezone.utc)),
        reading(user_id, "heart_rate", 112, datetime(2024, 1, 2, 18, 0, tzinfo=timezone.utc)),
        reading(user_id, "sleep", 7.5, datetime(2024, 1, 1, 7, 0, tzinfo=timezone.utc)),
        reading(user_id, "sleep", 4.5, datetime(2024, 1, 1, 23, 0, tzinfo=timezone.utc)),
        # yesterday's steps do not count toward today
        reading(user_id, "steps", 9000, datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)),
    ]
    service, notification_repo = build_service(readings)

    result = await service.analyze(user_id, now)

    assert kinds(result.alerts) == ["low_steps", "high_heart_rate", "short_sleep"]
    assert result.notifications_created == 3
    assert [n.type for n in notification_repo.created] == [
        "activity_reminder",
        "heart_rate_alert",
        "sleep_alert",
    ]
    assert "3,000" in result.alerts[0].context


async def test_analyze_counts_only_generated_notifications(user_id):
    now = datetime(2024, 1, 2, 20, 0, tzinfo=timezone.utc)
    readings = [reading(user_id, "heart_rate", 40, datetime(2024, 1, 2, 19, 0, tzinfo=timezone.utc))]
    service, notification_repo = build_service(readings, StubGenerator(fail_on={1}))

    result = await service.analyze(user_id, now)

    assert len(result.alerts) == 2
    assert result.notifications_created == 1
    assert notification_repo.created[0].type == "heart_rate_alert"


async def test_repeated_analysis_duplicates_alerts(user_id):
    now = datetime(2024, 1, 2, 20, 0, tzinfo=timezone.utc)
    service, notification_repo = build_service([])

    await service.analyze(user_id, now)
    await service.analyze(user_id, now)

    assert [n.type for n in notification_repo.created] == ["activity_reminder", "activity_reminder"]
