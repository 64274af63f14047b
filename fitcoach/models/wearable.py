from sqlalchemy import Column, String, Boolean, ForeignKey, Text, DateTime, Numeric
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from .base import BaseModel


class WearableConnection(BaseModel):
    __tablename__ = "wearable_connections"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    provider = Column(String(30), nullable=False)  # fitbit, garmin
    access_token = Column(Text, nullable=True)
    refresh_token = Column(Text, nullable=True)
    token_expires_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_sync_at = Column(DateTime(timezone=True), nullable=True)
    data = Column("metadata", JSONB, nullable=True)

    user = relationship("User", back_populates="wearable_connections")
    readings = relationship("WearableData", back_populates="connection", cascade="all, delete-orphan")


class WearableData(BaseModel):
    __tablename__ = "wearable_data"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    connection_id = Column(UUID(as_uuid=True), ForeignKey("wearable_connections.id", ondelete="SET NULL"), nullable=True)
    data_type = Column(String(30), nullable=False, index=True)  # steps, heart_rate, sleep, calories...
    value = Column(Numeric, nullable=False)
    unit = Column(String(20), nullable=True)
    recorded_at = Column(DateTime(timezone=True), nullable=False, index=True)
    source = Column(String(30), nullable=True)
    data = Column("metadata", JSONB, nullable=True)

    connection = relationship("WearableConnection", back_populates="readings")
