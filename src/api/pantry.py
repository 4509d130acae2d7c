"""Pantry API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_household_context
from src.database import get_db
from src.errors import NotFoundError
from src.models.pantry import PantryItem
from src.models.user import User
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.pantry import (
    PantryItemCreate,
    PantryItemResponse,
    PantryItemUpdate,
    ShelfLifeResponse,
)
from src.services.household import HouseholdContext, item_attribution, scope_filter
from src.services.patching import apply_patch, column_values
from src.services.shelf_life import estimate_shelf_life, suggested_expiration_date

router = APIRouter(prefix="/api/pantry", tags=["pantry"])


def get_scoped_pantry_item(db: Session, item_id: int, context: HouseholdContext) -> PantryItem:
    """Get a pantry item in the caller's household or personal scope."""
    item = (
        db.query(PantryItem)
        .filter(PantryItem.id == item_id, *scope_filter(PantryItem, context))
        .first()
    )
    if not item:
        raise NotFoundError("Item not found")
    return item


@router.get("", response_model=ApiResponse[list[PantryItemResponse]])
def list_pantry_items(
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the pantry of the active household, or the personal pantry."""
    items = (
        db.query(PantryItem)
        .filter(*scope_filter(PantryItem, context))
        .order_by(PantryItem.name)
        .all()
    )
    return ApiResponse(data=[PantryItemResponse.model_validate(i) for i in items])


@router.get("/shelf-life", response_model=ApiResponse[ShelfLifeResponse])
def get_shelf_life(
    current_user: Annotated[User, Depends(get_current_user)],
    name: str | None = None,
    categories: Annotated[list[str] | None, Query()] = None,
):
    """Estimate how long a product keeps.

    ``categories`` may be repeated or comma-separated, e.g. ``en:dairy,en:milks``.
    """
    category_list = [
        c.strip() for value in categories or [] for c in value.split(",") if c.strip()
    ]
    estimate = estimate_shelf_life(name, category_list)
    return ApiResponse(
        data=ShelfLifeResponse(
            days=estimate.days,
            suggested_expiration_date=suggested_expiration_date(name, category_list),
            source=estimate.source,
        )
    )


@router.post(
    "",
    response_model=ApiResponse[PantryItemResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_pantry_item(
    item_data: PantryItemCreate,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add an item to the pantry in the caller's current scope."""
    values = column_values(item_data, exclude={"use_suggested_expiration"})
    values["name"] = item_data.name.strip()
    if item_data.use_suggested_expiration and item_data.expiration_date is None:
        values["expiration_date"] = suggested_expiration_date(
            item_data.name,
            [item_data.category.value] if item_data.category else None,
        )

    item = PantryItem(**item_attribution(context), **values)
    db.add(item)
    db.commit()
    db.refresh(item)
    return ApiResponse(
        data=PantryItemResponse.model_validate(item), message="Item added successfully"
    )


@router.get("/{item_id}", response_model=ApiResponse[PantryItemResponse])
def get_pantry_item(
    item_id: int,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific pantry item."""
    item = get_scoped_pantry_item(db, item_id, context)
    return ApiResponse(data=PantryItemResponse.model_validate(item))


@router.put("/{item_id}", response_model=ApiResponse[PantryItemResponse])
def update_pantry_item(
    item_id: int,
    item_data: PantryItemUpdate,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the fields present in the request body."""
    item = get_scoped_pantry_item(db, item_id, context)
    apply_patch(item, item_data, non_nullable={"name", "quantity", "storage_location"})
    db.commit()
    db.refresh(item)
    return ApiResponse(
        data=PantryItemResponse.model_validate(item), message="Item updated successfully"
    )


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_pantry_item(
    item_id: int,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a pantry item."""
    item = get_scoped_pantry_item(db, item_id, context)
    db.delete(item)
    db.commit()
    return MessageResponse(message="Item deleted successfully")
