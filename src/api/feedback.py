"""Feedback API endpoints."""

import logging
import math
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_admin
from src.database import get_db
from src.errors import NotFoundError
from src.models.enums import FeedbackStatus, FeedbackType
from src.models.feedback import Feedback
from src.models.user import User
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.feedback import (
    FeedbackCreate,
    FeedbackPage,
    FeedbackResponse,
    FeedbackStatusUpdate,
    Pagination,
)
from src.services.patching import apply_patch, column_values

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


def get_feedback_or_404(db: Session, feedback_id: int) -> Feedback:
    feedback = db.query(Feedback).filter(Feedback.id == feedback_id).first()
    if not feedback:
        raise NotFoundError("Feedback not found")
    return feedback


@router.post(
    "",
    response_model=ApiResponse[FeedbackResponse],
    status_code=status.HTTP_201_CREATED,
)
def submit_feedback(
    feedback_data: FeedbackCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Submit a bug report or suggestion. No login required."""
    feedback = Feedback(**column_values(feedback_data))
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    logger.info(f"Feedback {feedback.id} submitted ({feedback.type})")
    return ApiResponse(
        data=FeedbackResponse.model_validate(feedback),
        message="Feedback submitted successfully",
    )


@router.get("", response_model=ApiResponse[FeedbackPage])
def list_feedback(
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
    feedback_type: Annotated[FeedbackType | None, Query(alias="type")] = None,
    status_filter: Annotated[FeedbackStatus | None, Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
):
    """List feedback, newest first (admin only)."""
    query = db.query(Feedback)
    if feedback_type is not None:
        query = query.filter(Feedback.type == feedback_type.value)
    if status_filter is not None:
        query = query.filter(Feedback.status == status_filter.value)

    total = query.count()
    feedback = (
        query.order_by(Feedback.created_at.desc(), Feedback.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return ApiResponse(
        data=FeedbackPage(
            feedback=[FeedbackResponse.model_validate(f) for f in feedback],
            pagination=Pagination(
                page=page, limit=limit, total=total, pages=math.ceil(total / limit)
            ),
        )
    )


@router.patch("/{feedback_id}/status", response_model=ApiResponse[FeedbackResponse])
def update_feedback_status(
    feedback_id: int,
    update: FeedbackStatusUpdate,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Change status, priority or notes (admin only)."""
    feedback = get_feedback_or_404(db, feedback_id)
    apply_patch(feedback, update, non_nullable={"status", "priority"})
    if update.status is not None and update.status.is_terminal():
        feedback.resolved_at = datetime.now(UTC)
    db.commit()
    db.refresh(feedback)
    return ApiResponse(data=FeedbackResponse.model_validate(feedback), message="Feedback updated")


@router.delete("/{feedback_id}", response_model=MessageResponse)
def delete_feedback(
    feedback_id: int,
    admin: Annotated[User, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete feedback (admin only)."""
    feedback = get_feedback_or_404(db, feedback_id)
    db.delete(feedback)
    db.commit()
    return MessageResponse(message="Feedback deleted")
