"""
Wearable Sync Service

Pulls today's activity, heart-rate and sleep data from a fitness provider,
normalizes it into wearable_data rows and triggers the health analysis.

Providers:
---------
- fitbit: OAuth 2.0 bearer token, REST API
- garmin: connection accepted but sync not implemented (OAuth 1.0a)

Normalized row shape:
    {user_id, connection_id, data_type, value, unit, recorded_at, source, metadata}
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional
from uuid import UUID
from zoneinfo import ZoneInfo

import httpx

from fitcoach.core.config import settings
from fitcoach.db.redis import get_arq_pool

logger = logging.getLogger(__name__)


class WearableSyncError(Exception):
    """Base exception for wearable sync errors."""
    pass


class ConnectionNotFoundError(WearableSyncError):
    """Connection not found or owned by another user."""
    pass


@dataclass
class SyncResult:
    synced: int = 0
    provider: Optional[str] = None


# ============================================================
# NORMALIZATION
# ============================================================

def _row(
    user_id: UUID,
    connection_id: UUID,
    data_type: str,
    value: float,
    unit: str,
    recorded_at: datetime,
    source: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "connection_id": connection_id,
        "data_type": data_type,
        "value": value,
        "unit": unit,
        "recorded_at": recorded_at,
        "source": source,
        "data": metadata or {},
    }


def normalize_fitbit_activity(payload: Dict[str, Any], user_id, connection_id, recorded_at) -> List[Dict[str, Any]]:
    """Daily activity summary -> steps, calories, distance, active minutes."""
    summary = payload.get("summary")
    if not summary:
        return []

    distances = summary.get("distances") or [{}]
    return [
        _row(user_id, connection_id, "steps", summary.get("steps") or 0, "steps", recorded_at, "fitbit"),
        _row(user_id, connection_id, "calories", summary.get("caloriesOut") or 0, "kcal", recorded_at, "fitbit"),
        _row(user_id, connection_id, "distance", distances[0].get("distance") or 0, "km", recorded_at, "fitbit"),
        _row(user_id, connection_id, "active_minutes", summary.get("veryActiveMinutes") or 0, "minutes", recorded_at, "fitbit"),
    ]


def normalize_fitbit_heart(payload: Dict[str, Any], user_id, connection_id, recorded_at) -> List[Dict[str, Any]]:
    """Heart-rate day summary -> resting heart rate, if reported."""
    days = payload.get("activities-heart") or []
    resting = days[0].get("value", {}).get("restingHeartRate") if days else None
    if not resting:
        return []
    return [
        _row(user_id, connection_id, "heart_rate", resting, "bpm", recorded_at, "fitbit", {"type": "resting"}),
    ]


def normalize_fitbit_sleep(payload: Dict[str, Any], user_id, connection_id, recorded_at) -> List[Dict[str, Any]]:
    """Sleep log summary -> hours asleep, if reported."""
    minutes = (payload.get("summary") or {}).get("totalMinutesAsleep")
    if not minutes:
        return []
    return [
        _row(user_id, connection_id, "sleep", minutes / 60, "hours", recorded_at, "fitbit"),
    ]


# ============================================================
# FITBIT CLIENT
# ============================================================

class FitbitClient:
    """Minimal Fitbit Web API client for one connection."""

    def __init__(self, access_token: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.access_token = access_token
        self.base_url = settings.FITBIT_API_URL
        self._transport = transport

    async def _get_json(self, client: httpx.AsyncClient, path: str) -> Optional[Dict[str, Any]]:
        response = await client.get(
            f"{self.base_url}{path}",
            headers={"Authorization": f"Bearer {self.access_token}"},
        )
        if response.status_code != 200:
            logger.warning(f"Fitbit {path} returned {response.status_code}")
            return None
        return response.json()

    async def fetch_day(self, user_id: UUID, connection_id: UUID, now: datetime) -> List[Dict[str, Any]]:
        """
        Fetch and normalize one day of data.

        A failed endpoint is skipped; a network error ends the fetch with
        whatever was gathered so far.
        """
        day = now.astimezone(ZoneInfo(settings.TIMEZONE)).date().isoformat()
        rows: List[Dict[str, Any]] = []

        endpoints = [
            (f"/1/user/-/activities/date/{day}.json", normalize_fitbit_activity),
            (f"/1/user/-/activities/heart/date/{day}/1d.json", normalize_fitbit_heart),
            (f"/1.2/user/-/sleep/date/{day}.json", normalize_fitbit_sleep),
        ]

        try:
            async with httpx.AsyncClient(timeout=30.0, transport=self._transport) as client:
                for path, normalize in endpoints:
                    payload = await self._get_json(client, path)
                    if payload:
                        rows.extend(normalize(payload, user_id, connection_id, now))
        except httpx.HTTPError as e:
            logger.error(f"Error fetching Fitbit data: {e}")

        return rows

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """Exchange an OAuth authorization code for tokens."""
        if not settings.FITBIT_CLIENT_ID or not settings.FITBIT_CLIENT_SECRET:
            raise WearableSyncError("Fitbit client credentials not configured")

        async with httpx.AsyncClient(timeout=30.0, transport=self._transport) as client:
            response = await client.post(
                f"{self.base_url}/oauth2/token",
                auth=(settings.FITBIT_CLIENT_ID, settings.FITBIT_CLIENT_SECRET),
                data={
                    "client_id": settings.FITBIT_CLIENT_ID,
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": settings.FITBIT_REDIRECT_URI or "",
                },
            )

        if response.status_code != 200:
            raise WearableSyncError(f"Fitbit token exchange failed: {response.text}")
        return response.json()


# ============================================================
# HEALTH ANALYSIS TRIGGER
# ============================================================

async def enqueue_health_analysis(user_id: UUID) -> None:
    """Queue the wearable health analysis job for a user."""
    pool = await get_arq_pool()
    await pool.enqueue_job("analyze_wearable_health", user_id=str(user_id))
    logger.info(f"Queued health analysis for user {user_id}")


# ============================================================
# SERVICE
# ============================================================

class WearableSyncService:
    """Syncs provider data for a connection and stores the readings."""

    def __init__(
        self,
        wearable_repo,
        fitbit_client_factory: Callable[[Optional[str]], FitbitClient] = FitbitClient,
        on_synced: Callable[[UUID], Awaitable[None]] = enqueue_health_analysis,
    ):
        self.wearable_repo = wearable_repo
        self.fitbit_client_factory = fitbit_client_factory
        self.on_synced = on_synced

    async def sync(self, connection_id: UUID, user_id: UUID, now: Optional[datetime] = None) -> SyncResult:
        now = now or datetime.now(timezone.utc)
        logger.info(f"Syncing data for connection: {connection_id}")

        connection = await self.wearable_repo.get_user_connection(connection_id, user_id)
        if connection is None:
            raise ConnectionNotFoundError("Connection not found")

        if connection.provider == "fitbit":
            client = self.fitbit_client_factory(connection.access_token)
            rows = await client.fetch_day(user_id, connection.id, now)
        elif connection.provider == "garmin":
            logger.info("Garmin sync not yet implemented")
            rows = []
        else:
            raise WearableSyncError(f"Unsupported provider: {connection.provider}")

        # Readings and last_sync_at commit separately; a failed stamp keeps the readings
        if rows:
            await self.wearable_repo.add_readings(rows)
        await self.wearable_repo.touch_last_sync(connection.id, now)

        if rows:
            try:
                await self.on_synced(user_id)
            except Exception as e:
                logger.error(f"Error triggering health analysis: {e}")

        return SyncResult(synced=len(rows), provider=connection.provider)

    async def connect(self, user_id: UUID, provider: str, code: str, now: Optional[datetime] = None):
        """Complete the OAuth flow and store (or refresh) the connection."""
        now = now or datetime.now(timezone.utc)
        logger.info(f"Processing OAuth callback for {provider}")

        if provider != "fitbit":
            raise WearableSyncError("Unsupported provider")

        token_data = await self.fitbit_client_factory(None).exchange_code(code)

        return await self.wearable_repo.upsert_connection(
            user_id,
            provider,
            access_token=token_data.get("access_token"),
            refresh_token=token_data.get("refresh_token"),
            token_expires_at=now + timedelta(seconds=int(token_data.get("expires_in") or 0)),
            is_active=True,
            data={"scope": token_data.get("scope")},
        )
