"""
AI Coach Endpoints

Endpoints:
----------
- POST /coach/messages   - Send a message to the AI coach and get the reply
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from fitcoach.api.deps import CurrentUser, get_current_user, get_coach_service
from fitcoach.schemas.coach import CoachMessageRequest, CoachMessageResponse
from fitcoach.services.coach_service import (
    CoachService,
    ConversationNotFoundError,
    CoachGenerationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/coach", tags=["AI Coach"])


@router.post(
    "/messages",
    response_model=CoachMessageResponse,
    summary="Chat with the AI coach",
)
async def send_coach_message(
    data: CoachMessageRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    try:
        reply = await service.send_message(
            user_id=current_user.id,
            conversation_id=data.conversation_id,
            content=data.message,
            email=current_user.email,
        )
    except ConversationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except CoachGenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return CoachMessageResponse(message=reply)
