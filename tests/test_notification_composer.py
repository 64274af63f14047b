from datetime import datetime, timezone

import pytest

from fitcoach.ai.prompts.reminder_prompts import REMINDER_TITLES, HEALTH_ALERT_TITLES
from fitcoach.services.notification_service import HealthAlert, NotificationComposer
from fitcoach.services.snapshot import ActivitySnapshot, build_activity_snapshot
from tests.conftest import FakeReminderRepo, FakeRule, StubGenerator

NOW = datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def rule(user_id):
    return FakeRule(user_id=user_id, reminder_type="hydration", frequency_hours=4)


@pytest.fixture
def reminder_repo(rule):
    return FakeReminderRepo([rule])


async def test_reminder_is_persisted_and_stamped(rule, reminder_repo, notification_repo, generator):
    composer = NotificationComposer(notification_repo, generator, reminder_repo=reminder_repo, locale="es")

    notification = await composer.compose_reminder(rule, ActivitySnapshot(), NOW)

    assert notification is not None
    assert len(notification_repo.created) == 1
    assert notification.title == REMINDER_TITLES["es"]["hydration"]
    assert notification.body == generator.text
    assert notification.type == "reminder"
    assert notification.data == {
        "reminder_type": "hydration",
        "reminder_id": str(rule.id),
        "priority": "normal",
        "ai_generated": True,
    }
    assert rule.last_sent_at == NOW


async def test_failed_generation_writes_nothing(rule, reminder_repo, notification_repo):
    composer = NotificationComposer(
        notification_repo, StubGenerator(fail_on={1}), reminder_repo=reminder_repo, locale="es"
    )

    notification = await composer.compose_reminder(rule, ActivitySnapshot(), NOW)

    assert notification is None
    assert notification_repo.created == []
    assert rule.last_sent_at is None
    assert reminder_repo.mark_sent_calls == []


async def test_unexpected_generator_error_is_skipped(rule, reminder_repo, notification_repo):
    generator = StubGenerator(fail_on={1}, error=RuntimeError("boom"))
    composer = NotificationComposer(notification_repo, generator, reminder_repo=reminder_repo)

    assert await composer.compose_reminder(rule, ActivitySnapshot(), NOW) is None
    assert notification_repo.created == []


async def test_prompt_uses_snapshot_and_locale(rule, reminder_repo, notification_repo, generator, activity_repo, user_id):
    composer = NotificationComposer(notification_repo, generator, reminder_repo=reminder_repo, locale="en")
    snapshot = await build_activity_snapshot(activity_repo, user_id)

    notification = await composer.compose_reminder(rule, snapshot, NOW)

    call = generator.calls[0]
    assert "English" in call["system"]
    prompt = call["messages"][0]["content"]
    assert "level 3" in prompt
    assert "420 points" in prompt
    assert "Carrera de 5K" in prompt
    assert notification.title == REMINDER_TITLES["en"]["hydration"]


async def test_stamp_never_moves_backward(rule, reminder_repo, notification_repo, generator):
    later = datetime(2024, 1, 3, 0, 0, tzinfo=timezone.utc)
    rule.last_sent_at = later
    composer = NotificationComposer(notification_repo, generator, reminder_repo=reminder_repo)

    await composer.compose_reminder(rule, ActivitySnapshot(), NOW)

    assert rule.last_sent_at == later


async def test_health_alert_notification(notification_repo, generator, user_id):
    composer = NotificationComposer(notification_repo, generator, locale="es")
    alert = HealthAlert(
        kind="high_heart_rate",
        notification_type="heart_rate_alert",
        title=HEALTH_ALERT_TITLES["es"]["high_heart_rate"],
        context="Tu frecuencia cardíaca está en 110 bpm",
        priority="high",
        value=110,
    )

    notification = await composer.compose_health_alert(user_id, alert)

    assert notification.type == "heart_rate_alert"
    assert notification.title == "Frecuencia cardíaca elevada"
    assert notification.data["priority"] == "high"
    assert notification.data["context"] == alert.context
    assert "urgent" in generator.calls[0]["messages"][0]["content"]


async def test_push_failure_does_not_affect_persistence(rule, reminder_repo, notification_repo, generator):
    pushed = []

    async def failing_push(user_id, title, body, data):
        pushed.append(title)
        raise RuntimeError("fcm down")

    composer = NotificationComposer(
        notification_repo, generator, reminder_repo=reminder_repo, push_notifier=failing_push
    )

    notification = await composer.compose_reminder(rule, ActivitySnapshot(), NOW)

    assert notification is not None
    assert pushed == [notification.title]
    assert rule.last_sent_at == NOW
