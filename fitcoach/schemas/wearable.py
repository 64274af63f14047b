"""
Wearable Schemas

Request/response models for wearable sync, OAuth callback and the
health analysis trigger.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class HealthAnalysisRequest(BaseModel):
    userId: UUID


class HealthAnalysisResponse(BaseModel):
    success: bool
    analyzed: bool
    notifications_created: int
    message: str


class SyncResponse(BaseModel):
    success: bool
    synced: int
    message: str


class OAuthCallbackRequest(BaseModel):
    provider: str = Field(..., description="fitbit or garmin")
    code: str = Field(..., min_length=1)
    state: Optional[str] = None


class WearableConnectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    provider: str
    is_active: bool
    token_expires_at: Optional[datetime] = None
    last_sync_at: Optional[datetime] = None


class OAuthCallbackResponse(BaseModel):
    success: bool
    connection: WearableConnectionResponse
