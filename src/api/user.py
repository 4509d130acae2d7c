"""User preference API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.models.user import User, default_preferences
from src.schemas.common import ApiResponse
from src.schemas.user import UserPreferences

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/preferences", response_model=ApiResponse[UserPreferences])
def get_preferences(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Stored preferences, or the defaults if none were saved."""
    preferences = {**default_preferences(), **(current_user.preferences or {})}
    return ApiResponse(data=UserPreferences(**preferences))


@router.put("/preferences", response_model=ApiResponse[UserPreferences])
def update_preferences(
    preferences: UserPreferences,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Replace all preferences; omitted fields reset to their defaults."""
    current_user.preferences = preferences.model_dump()
    db.commit()
    return ApiResponse(data=preferences, message="Preferences updated")
