"""
Reminder Endpoints

Endpoints:
----------
- GET   /reminders/settings                - List the user's reminder rules (seeds defaults)
- PATCH /reminders/settings/{id}           - Toggle a rule or change its frequency
- POST  /reminders/send-smart-reminders    - Scheduled trigger (service credential)
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from fitcoach.api.deps import (
    CurrentUser,
    get_current_user,
    require_service_role,
    get_smart_reminder_service,
    get_reminder_settings_service,
)
from fitcoach.schemas.reminder import (
    ReminderSettingResponse,
    ReminderSettingUpdate,
    SmartReminderRunResponse,
)
from fitcoach.services.reminder_service import (
    SmartReminderService,
    ReminderSettingsService,
    ReminderSettingNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reminders", tags=["Reminders"])


@router.get(
    "/settings",
    response_model=List[ReminderSettingResponse],
    summary="List reminder settings for the current user",
)
async def list_reminder_settings(
    current_user: CurrentUser = Depends(get_current_user),
    service: ReminderSettingsService = Depends(get_reminder_settings_service),
):
    return await service.list_settings(current_user.id)


@router.patch(
    "/settings/{setting_id}",
    response_model=ReminderSettingResponse,
    summary="Update a reminder setting",
)
async def update_reminder_setting(
    setting_id: UUID,
    data: ReminderSettingUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: ReminderSettingsService = Depends(get_reminder_settings_service),
):
    try:
        return await service.update_setting(setting_id, current_user.id, data)
    except ReminderSettingNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/send-smart-reminders",
    response_model=SmartReminderRunResponse,
    summary="Send every due smart reminder",
    description="""
    Invoked periodically by the scheduler. Evaluates all enabled reminder
    rules and sends an AI-written notification for each due rule.

    Rules whose text generation fails are skipped and stay due.
    """,
    dependencies=[Depends(require_service_role)],
)
async def send_smart_reminders(
    service: SmartReminderService = Depends(get_smart_reminder_service),
):
    try:
        result = await service.run()
    except Exception as e:
        logger.exception("Error in send-smart-reminders")
        return JSONResponse(status_code=500, content={"error": str(e) or "Unknown error"})

    return SmartReminderRunResponse(
        success=True,
        sentCount=result.sent_count,
        totalChecked=result.total_checked,
    )
