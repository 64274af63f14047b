"""
Wearable Endpoints

Endpoints:
----------
- POST /wearables/connections/{id}/sync   - Pull today's data from the provider
- POST /wearables/oauth/callback          - Complete the provider OAuth flow
- POST /wearables/analyze-health          - Health alert analysis (service credential)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from fitcoach.api.deps import (
    CurrentUser,
    get_current_user,
    require_service_role,
    get_wearable_health_service,
    get_wearable_sync_service,
)
from fitcoach.core.config import settings
from fitcoach.schemas.wearable import (
    HealthAnalysisRequest,
    HealthAnalysisResponse,
    SyncResponse,
    OAuthCallbackRequest,
    OAuthCallbackResponse,
    WearableConnectionResponse,
)
from fitcoach.services.wearable_health_service import WearableHealthService
from fitcoach.services.wearable_sync_service import (
    WearableSyncService,
    WearableSyncError,
    ConnectionNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wearables", tags=["Wearables"])


@router.post(
    "/connections/{connection_id}/sync",
    response_model=SyncResponse,
    summary="Sync today's data for a wearable connection",
)
async def sync_connection(
    connection_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: WearableSyncService = Depends(get_wearable_sync_service),
):
    try:
        result = await service.sync(connection_id, current_user.id)
    except ConnectionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except WearableSyncError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SyncResponse(
        success=True,
        synced=result.synced,
        message=f"Synced {result.synced} records",
    )


@router.post(
    "/oauth/callback",
    response_model=OAuthCallbackResponse,
    summary="Exchange an OAuth code and store the connection",
)
async def oauth_callback(
    data: OAuthCallbackRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: WearableSyncService = Depends(get_wearable_sync_service),
):
    try:
        connection = await service.connect(current_user.id, data.provider, data.code)
    except WearableSyncError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return OAuthCallbackResponse(
        success=True,
        connection=WearableConnectionResponse.model_validate(connection),
    )


@router.post(
    "/analyze-health",
    response_model=HealthAnalysisResponse,
    summary="Check a user's synced metrics and create health alerts",
    description="""
    Invoked after a successful wearable sync with `{"userId": "..."}`.
    Creates one AI-worded notification per breached threshold
    (steps, heart rate, sleep).
    """,
    dependencies=[Depends(require_service_role)],
)
async def analyze_health(
    request: Request,
    service: WearableHealthService = Depends(get_wearable_health_service),
):
    try:
        body = HealthAnalysisRequest.model_validate(await request.json())
        result = await service.analyze(body.userId)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": f"Invalid request body: {e.errors()[0]['msg']}"})
    except Exception as e:
        logger.exception("Error in analyze-health")
        return JSONResponse(status_code=400, content={"error": str(e) or "Unknown error"})

    return HealthAnalysisResponse(
        success=True,
        analyzed=True,
        notifications_created=result.notifications_created,
        message=result.message(settings.NOTIFICATION_LOCALE),
    )
