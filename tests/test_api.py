from datetime import datetime, timedelta, timezone
import uuid

import pytest
from fastapi.testclient import TestClient

from fitcoach.api import deps
from fitcoach.core.security import create_access_token, verify_token
from fitcoach.main import app
from fitcoach.services.reminder_service import ReminderRunResult, ReminderSettingsService
from fitcoach.services.wearable_health_service import HealthAnalysisResult
from tests.conftest import FakeReminderRepo

SERVICE_AUTH = {"Authorization": "Bearer test-service-key"}


class FakeSmartReminderService:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    async def run(self, now=None):
        if self.error:
            raise self.error
        return self.result


class FakeHealthService:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.users = []

    async def analyze(self, user_id, now=None):
        self.users.append(user_id)
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def override(dependency, value):
    app.dependency_overrides[dependency] = lambda: value


# ============================================================
# Scheduled trigger
# ============================================================

def test_send_smart_reminders_returns_counts(client):
    override(deps.get_smart_reminder_service, FakeSmartReminderService(ReminderRunResult(5, 3, 2)))

    response = client.post("/api/v1/reminders/send-smart-reminders", headers=SERVICE_AUTH)

    assert response.status_code == 200
    assert response.json() == {"success": True, "sentCount": 2, "totalChecked": 5}


@pytest.mark.parametrize(
    "headers,error",
    [
        ({}, "No authorization header"),
        ({"Authorization": "test-service-key"}, "Invalid authorization header format"),
        ({"Authorization": "Bearer wrong"}, "Unauthorized"),
    ],
)
def test_trigger_rejects_bad_credentials(client, headers, error):
    service = FakeSmartReminderService(ReminderRunResult(1, 1, 1))
    override(deps.get_smart_reminder_service, service)

    response = client.post("/api/v1/reminders/send-smart-reminders", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"error": error}


def test_send_smart_reminders_data_error_is_500(client):
    override(deps.get_smart_reminder_service, FakeSmartReminderService(error=RuntimeError("db unavailable")))

    response = client.post("/api/v1/reminders/send-smart-reminders", headers=SERVICE_AUTH)

    assert response.status_code == 500
    assert response.json() == {"error": "db unavailable"}


# ============================================================
# Wearable trigger
# ============================================================

def test_analyze_health_returns_summary(client):
    service = FakeHealthService(HealthAnalysisResult(notifications_created=2))
    override(deps.get_wearable_health_service, service)
    user_id = uuid.uuid4()

    response = client.post(
        "/api/v1/wearables/analyze-health", headers=SERVICE_AUTH, json={"userId": str(user_id)}
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "analyzed": True,
        "notifications_created": 2,
        "message": "Creadas 2 notificaciones inteligentes",
    }
    assert service.users == [user_id]


@pytest.mark.parametrize("body", [{}, {"userId": "not-a-uuid"}])
def test_analyze_health_bad_body_is_400(client, body):
    override(deps.get_wearable_health_service, FakeHealthService(HealthAnalysisResult()))

    response = client.post("/api/v1/wearables/analyze-health", headers=SERVICE_AUTH, json=body)

    assert response.status_code == 400
    assert "error" in response.json()


def test_analyze_health_data_error_is_400(client):
    override(deps.get_wearable_health_service, FakeHealthService(error=RuntimeError("db unavailable")))

    response = client.post(
        "/api/v1/wearables/analyze-health", headers=SERVICE_AUTH, json={"userId": str(uuid.uuid4())}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "db unavailable"}


# ============================================================
# User routes
# ============================================================

def test_reminder_settings_seeded_for_user(client):
    user = deps.CurrentUser(id=uuid.uuid4())
    override(deps.get_current_user, user)
    override(deps.get_reminder_settings_service, ReminderSettingsService(FakeReminderRepo()))

    response = client.get("/api/v1/reminders/settings")

    assert response.status_code == 200
    assert sorted(s["reminder_type"] for s in response.json()) == ["hydration", "rest", "workout"]


def test_update_unknown_setting_is_404(client):
    override(deps.get_current_user, deps.CurrentUser(id=uuid.uuid4()))
    override(deps.get_reminder_settings_service, ReminderSettingsService(FakeReminderRepo()))

    response = client.patch(f"/api/v1/reminders/settings/{uuid.uuid4()}", json={"enabled": False})

    assert response.status_code == 404
    assert response.json() == {"detail": "Reminder setting not found"}


def test_update_rejects_non_positive_frequency(client):
    override(deps.get_current_user, deps.CurrentUser(id=uuid.uuid4()))
    override(deps.get_reminder_settings_service, ReminderSettingsService(FakeReminderRepo()))

    response = client.patch(f"/api/v1/reminders/settings/{uuid.uuid4()}", json={"frequency_hours": 0})

    assert response.status_code == 422


def test_user_routes_require_token(client):
    response = client.get("/api/v1/notifications")
    assert response.status_code in (401, 403)


# ============================================================
# Tokens
# ============================================================

def test_access_token_round_trip():
    user_id = uuid.uuid4()
    token = create_access_token(user_id, datetime.now(timezone.utc) + timedelta(hours=1), email="ana@example.com")

    payload = verify_token(token)

    assert payload["sub"] == str(user_id)
    assert payload["email"] == "ana@example.com"


def test_expired_token_is_rejected():
    token = create_access_token(uuid.uuid4(), datetime.now(timezone.utc) - timedelta(minutes=1))
    assert verify_token(token) is None
