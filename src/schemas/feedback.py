"""Feedback schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import FeedbackPriority, FeedbackStatus, FeedbackType


class FeedbackCreate(BaseModel):
    """Submit feedback from the app (no account required)."""

    type: FeedbackType
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    email: str | None = Field(None, max_length=255)
    user_agent: str | None = Field(None, max_length=512)
    screen_resolution: str | None = Field(None, max_length=32)


class FeedbackStatusUpdate(BaseModel):
    """Triage update by an admin."""

    status: FeedbackStatus | None = None
    priority: FeedbackPriority | None = None
    notes: str | None = Field(None, max_length=1000)


class FeedbackResponse(BaseModel):
    """Feedback response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    title: str
    description: str
    email: str | None
    user_agent: str | None
    screen_resolution: str | None
    status: str
    priority: str
    notes: str | None
    resolved_at: datetime | None
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class FeedbackPage(BaseModel):
    """One page of feedback, newest first."""

    feedback: list[FeedbackResponse]
    pagination: Pagination
