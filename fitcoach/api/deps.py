from dataclasses import dataclass
from typing import Optional
from uuid import UUID
import logging

from fastapi import HTTPException, Depends, Header, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.ai.llm import get_text_generator
from fitcoach.core.config import settings
from fitcoach.core.security import verify_token, verify_service_key
from fitcoach.db.database import get_db
from fitcoach.repositories import (
    UserRepository,
    ReminderSettingRepository,
    NotificationRepository,
    ActivityRepository,
    WearableRepository,
    CoachRepository,
)
from fitcoach.services.notification_service import NotificationComposer, PushNotifier
from fitcoach.services.reminder_service import SmartReminderService, ReminderSettingsService
from fitcoach.services.wearable_health_service import WearableHealthService
from fitcoach.services.wearable_sync_service import WearableSyncService
from fitcoach.services.coach_service import CoachService

logger = logging.getLogger(__name__)

# Security scheme for Swagger UI
security = HTTPBearer()


@dataclass(frozen=True)
class CurrentUser:
    id: UUID
    email: Optional[str] = None


# =====================================================
# Authentication
# =====================================================
async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """
    Dependency that validates the user's access token.

    Raises:
        HTTPException 401: If token is invalid or missing
    """
    payload = verify_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token subject",
            headers={"WWW-Authenticate": "Bearer"},
        )

    await UserRepository(db).ensure_exists(user_id)
    return CurrentUser(id=user_id, email=payload.get("email"))


async def require_service_role(authorization: Optional[str] = Header(None)) -> None:
    """Guard for endpoints invoked by the scheduler or the sync pipeline."""
    verify_service_key(authorization)


# =====================================================
# Service factories
# =====================================================
def build_notification_composer(db: AsyncSession, with_reminders: bool = False) -> NotificationComposer:
    push = PushNotifier(UserRepository(db)) if settings.PUSH_NOTIFICATIONS_ENABLED else None
    return NotificationComposer(
        notification_repo=NotificationRepository(db),
        generator=get_text_generator(),
        reminder_repo=ReminderSettingRepository(db) if with_reminders else None,
        push_notifier=push,
    )


def build_smart_reminder_service(db: AsyncSession) -> SmartReminderService:
    return SmartReminderService(
        reminder_repo=ReminderSettingRepository(db),
        activity_repo=ActivityRepository(db),
        composer=build_notification_composer(db, with_reminders=True),
    )


def build_wearable_health_service(db: AsyncSession) -> WearableHealthService:
    return WearableHealthService(
        wearable_repo=WearableRepository(db),
        composer=build_notification_composer(db),
    )


def get_smart_reminder_service(db: AsyncSession = Depends(get_db)) -> SmartReminderService:
    return build_smart_reminder_service(db)


def get_reminder_settings_service(db: AsyncSession = Depends(get_db)) -> ReminderSettingsService:
    return ReminderSettingsService(ReminderSettingRepository(db))


def get_wearable_health_service(db: AsyncSession = Depends(get_db)) -> WearableHealthService:
    return build_wearable_health_service(db)


def get_wearable_sync_service(db: AsyncSession = Depends(get_db)) -> WearableSyncService:
    return WearableSyncService(WearableRepository(db))


def get_notification_repo(db: AsyncSession = Depends(get_db)) -> NotificationRepository:
    return NotificationRepository(db)


def get_coach_service(db: AsyncSession = Depends(get_db)) -> CoachService:
    return CoachService(
        coach_repo=CoachRepository(db),
        activity_repo=ActivityRepository(db),
        generator=get_text_generator(),
    )
