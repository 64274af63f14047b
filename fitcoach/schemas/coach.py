from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class CoachMessageRequest(BaseModel):
    conversation_id: UUID
    message: str = Field(..., min_length=1, max_length=10000)

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message cannot be empty")
        return v


class CoachMessageResponse(BaseModel):
    message: str
