"""Feedback model."""

from sqlalchemy import Column, DateTime, Index, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class Feedback(Base, TimestampMixin):
    """Bug report or suggestion submitted from the app."""

    __tablename__ = "feedback"
    __table_args__ = (Index("ix_feedback_type_status", "type", "status"),)

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False, index=True)  # FeedbackType value
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False)
    email = Column(String(255), nullable=True)
    user_agent = Column(String(512), nullable=True)
    screen_resolution = Column(String(32), nullable=True)
    status = Column(String(20), nullable=False, default="new", index=True)
    priority = Column(String(20), nullable=False, default="medium")
    notes = Column(String(1000), nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
