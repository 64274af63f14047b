from sqlalchemy import Column, String, Integer, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from .base import BaseModel


class UserActivity(BaseModel):
    __tablename__ = "user_activities"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    activity_type = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    points_earned = Column(Integer, default=0, nullable=False)
    data = Column("metadata", JSONB, nullable=True)

    user = relationship("User", back_populates="activities")


class UserReward(BaseModel):
    __tablename__ = "user_rewards"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    level = Column(Integer, default=1, nullable=False)
    total_points = Column(Integer, default=0, nullable=False)


class UserAchievement(BaseModel):
    __tablename__ = "user_achievements"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    achievement_id = Column(UUID(as_uuid=True), nullable=False)
