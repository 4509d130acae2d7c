"""Recipe history API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import get_household_context
from src.database import get_db
from src.errors import NotFoundError
from src.models.recipe import RecipeHistory
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.recipe import RecipeHistoryResponse
from src.services.household import HouseholdContext, scope_filter

router = APIRouter(prefix="/api/recipe-history", tags=["recipe-history"])

HISTORY_LIMIT = 50


@router.get("", response_model=ApiResponse[list[RecipeHistoryResponse]])
def list_history(
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """The most recent generated recipe batches."""
    entries = (
        db.query(RecipeHistory)
        .filter(*scope_filter(RecipeHistory, context))
        .order_by(RecipeHistory.created_at.desc(), RecipeHistory.id.desc())
        .limit(HISTORY_LIMIT)
        .all()
    )
    return ApiResponse(data=[RecipeHistoryResponse.model_validate(e) for e in entries])


@router.delete("/{history_id}", response_model=MessageResponse)
def delete_history_item(
    history_id: int,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete one history entry."""
    entry = (
        db.query(RecipeHistory)
        .filter(RecipeHistory.id == history_id, *scope_filter(RecipeHistory, context))
        .first()
    )
    if not entry:
        raise NotFoundError("History item not found")
    db.delete(entry)
    db.commit()
    return MessageResponse(message="History item deleted")


@router.delete("", response_model=MessageResponse)
def clear_history(
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete every history entry in the current scope."""
    db.query(RecipeHistory).filter(*scope_filter(RecipeHistory, context)).delete(
        synchronize_session=False
    )
    db.commit()
    return MessageResponse(message="History cleared")
