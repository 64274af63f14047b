from datetime import datetime, timezone
from types import SimpleNamespace
import uuid

import httpx
import pytest

from fitcoach.services.wearable_sync_service import (
    ConnectionNotFoundError,
    FitbitClient,
    WearableSyncError,
    WearableSyncService,
    normalize_fitbit_activity,
    normalize_fitbit_heart,
    normalize_fitbit_sleep,
)
from tests.conftest import FakeWearableRepo

NOW = datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc)
CONN = uuid.uuid4()


def test_normalize_activity_summary(user_id):
    payload = {
        "summary": {
            "steps": 8421,
            "caloriesOut": 2100,
            "distances": [{"activity": "total", "distance": 6.2}],
            "veryActiveMinutes": 35,
        }
    }
    rows = normalize_fitbit_activity(payload, user_id, CONN, NOW)

    assert [(r["data_type"], r["value"], r["unit"]) for r in rows] == [
        ("steps", 8421, "steps"),
        ("calories", 2100, "kcal"),
        ("distance", 6.2, "km"),
        ("active_minutes", 35, "minutes"),
    ]
    assert all(r["source"] == "fitbit" and r["recorded_at"] == NOW for r in rows)


def test_normalize_heart_and_sleep(user_id):
    heart = normalize_fitbit_heart(
        {"activities-heart": [{"value": {"restingHeartRate": 58}}]}, user_id, CONN, NOW
    )
    sleep = normalize_fitbit_sleep({"summary": {"totalMinutesAsleep": 390}}, user_id, CONN, NOW)

    assert heart[0]["value"] == 58
    assert heart[0]["data"] == {"type": "resting"}
    assert sleep[0]["value"] == 6.5
    assert sleep[0]["unit"] == "hours"


def test_normalize_skips_missing_sections(user_id):
    assert normalize_fitbit_activity({}, user_id, CONN, NOW) == []
    assert normalize_fitbit_heart({"activities-heart": []}, user_id, CONN, NOW) == []
    assert normalize_fitbit_sleep({"summary": {}}, user_id, CONN, NOW) == []


async def test_fitbit_client_fetches_all_endpoints(user_id):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer token-1"
        path = request.url.path
        if path == "/1/user/-/activities/date/2024-01-02.json":
            return httpx.Response(200, json={"summary": {"steps": 100}})
        if path == "/1/user/-/activities/heart/date/2024-01-02/1d.json":
            return httpx.Response(500)
        if path == "/1.2/user/-/sleep/date/2024-01-02.json":
            return httpx.Response(200, json={"summary": {"totalMinutesAsleep": 300}})
        return httpx.Response(404)

    client = FitbitClient("token-1", transport=httpx.MockTransport(handler))
    rows = await client.fetch_day(user_id, CONN, NOW)

    assert [r["data_type"] for r in rows] == ["steps", "calories", "distance", "active_minutes", "sleep"]


class FakeFitbitClient:
    def __init__(self, rows):
        self.rows = rows

    async def fetch_day(self, user_id, connection_id, now):
        return self.rows


async def test_sync_stores_rows_and_triggers_analysis(user_id):
    connection = SimpleNamespace(id=CONN, user_id=user_id, provider="fitbit", access_token="t")
    repo = FakeWearableRepo(connections=[connection])
    rows = normalize_fitbit_sleep({"summary": {"totalMinutesAsleep": 300}}, user_id, CONN, NOW)
    triggered = []

    async def on_synced(uid):
        triggered.append(uid)

    service = WearableSyncService(repo, lambda token: FakeFitbitClient(rows), on_synced)
    result = await service.sync(CONN, user_id, NOW)

    assert result.synced == 1
    assert repo.added == rows
    assert repo.synced_at[CONN] == NOW
    assert triggered == [user_id]


async def test_trigger_failure_does_not_fail_sync(user_id):
    connection = SimpleNamespace(id=CONN, user_id=user_id, provider="fitbit", access_token="t")
    rows = normalize_fitbit_sleep({"summary": {"totalMinutesAsleep": 300}}, user_id, CONN, NOW)

    async def on_synced(uid):
        raise ConnectionError("redis down")

    service = WearableSyncService(
        FakeWearableRepo(connections=[connection]), lambda token: FakeFitbitClient(rows), on_synced
    )

    assert (await service.sync(CONN, user_id, NOW)).synced == 1


async def test_garmin_sync_is_empty_and_not_triggered(user_id):
    connection = SimpleNamespace(id=CONN, user_id=user_id, provider="garmin", access_token=None)
    triggered = []

    async def on_synced(uid):
        triggered.append(uid)

    service = WearableSyncService(FakeWearableRepo(connections=[connection]), on_synced=on_synced)
    result = await service.sync(CONN, user_id, NOW)

    assert result.synced == 0
    assert triggered == []


async def test_sync_unknown_connection(user_id):
    service = WearableSyncService(FakeWearableRepo())
    with pytest.raises(ConnectionNotFoundError):
        await service.sync(CONN, user_id, NOW)


async def test_connect_rejects_other_providers(user_id):
    service = WearableSyncService(FakeWearableRepo())
    with pytest.raises(WearableSyncError):
        await service.connect(user_id, "garmin", "code", NOW)


async def test_connect_stores_fitbit_tokens(user_id):
    class TokenClient:
        async def exchange_code(self, code):
            assert code == "abc"
            return {"access_token": "a", "refresh_token": "r", "expires_in": 3600, "scope": "activity"}

    repo = FakeWearableRepo()
    service = WearableSyncService(repo, lambda token: TokenClient())

    connection = await service.connect(user_id, "fitbit", "abc", NOW)

    assert connection.access_token == "a"
    assert connection.token_expires_at == datetime(2024, 1, 2, 13, 0, tzinfo=timezone.utc)
    assert connection.is_active is True
