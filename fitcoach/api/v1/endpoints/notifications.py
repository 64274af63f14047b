"""
Notification Endpoints

Endpoints:
----------
- GET    /notifications                 - List user notifications
- GET    /notifications/unread-count    - Get unread count
- POST   /notifications/mark-all-read   - Mark all as read
- POST   /notifications/{id}/read       - Mark one as read
- DELETE /notifications/{id}            - Delete one
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from fitcoach.api.deps import CurrentUser, get_current_user, get_notification_repo
from fitcoach.repositories.notification_repo import NotificationRepository
from fitcoach.schemas.notification import NotificationResponse, UnreadCountResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get(
    "",
    response_model=List[NotificationResponse],
    summary="List notifications for the current user",
)
async def list_notifications(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    current_user: CurrentUser = Depends(get_current_user),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    return await repo.list_for_user(current_user.id, skip=skip, limit=limit)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Get count of unread notifications",
)
async def unread_count(
    current_user: CurrentUser = Depends(get_current_user),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    return {"unread_count": await repo.unread_count(current_user.id)}


@router.post(
    "/mark-all-read",
    summary="Mark all notifications as read",
)
async def mark_all_read(
    current_user: CurrentUser = Depends(get_current_user),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    updated = await repo.mark_all_read(current_user.id)
    return {"message": "All notifications marked as read.", "updated": updated}


@router.post(
    "/{notification_id}/read",
    summary="Mark a notification as read",
)
async def mark_read(
    notification_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    if not await repo.mark_read(notification_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return {"message": "Notification marked as read."}


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a notification",
)
async def delete_notification(
    notification_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    if not await repo.delete_for_user(notification_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
