from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import BaseModel


class User(BaseModel):
    """Mirror of the auth provider's user; only what the backend needs."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=True, index=True)
    fcm_token = Column(String(500), nullable=True)

    reminder_settings = relationship("ReminderSetting", back_populates="user", cascade="all, delete-orphan")
    activities = relationship("UserActivity", back_populates="user", cascade="all, delete-orphan")
    wearable_connections = relationship("WearableConnection", back_populates="user", cascade="all, delete-orphan")
