"""Shopping list API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import case
from sqlalchemy.orm import Session

from src.api.dependencies import get_household_context
from src.database import get_db, transaction
from src.errors import NotFoundError
from src.models.enums import PantryCategory, ShoppingPriority
from src.models.pantry import PantryItem
from src.models.shopping_list import ShoppingListItem
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.pantry import PantryItemResponse
from src.schemas.shopping_list import (
    ShoppingListItemCreate,
    ShoppingListItemResponse,
    ShoppingListItemUpdate,
)
from src.services.household import HouseholdContext, item_attribution, scope_filter
from src.services.patching import apply_patch, column_values

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shopping-list", tags=["shopping-list"])

LOW_STOCK_THRESHOLD = 2

_priority_rank = case(
    {p.value: p.rank for p in ShoppingPriority},
    value=ShoppingListItem.priority,
    else_=ShoppingPriority.NORMAL.rank,
)


def get_scoped_shopping_item(
    db: Session, item_id: int, context: HouseholdContext
) -> ShoppingListItem:
    """Get a shopping list item in the caller's household or personal scope."""
    item = (
        db.query(ShoppingListItem)
        .filter(ShoppingListItem.id == item_id, *scope_filter(ShoppingListItem, context))
        .first()
    )
    if not item:
        raise NotFoundError("Item not found")
    return item


def _to_response(items: list[ShoppingListItem]) -> list[ShoppingListItemResponse]:
    return [ShoppingListItemResponse.model_validate(i) for i in items]


@router.get("", response_model=ApiResponse[list[ShoppingListItemResponse]])
def list_shopping_items(
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the shopping list: unchecked first, then by priority, newest first."""
    items = (
        db.query(ShoppingListItem)
        .filter(*scope_filter(ShoppingListItem, context))
        .order_by(
            ShoppingListItem.checked,
            _priority_rank.desc(),
            ShoppingListItem.added_date.desc(),
            ShoppingListItem.id.desc(),
        )
        .all()
    )
    return ApiResponse(data=_to_response(items))


@router.post(
    "",
    response_model=ApiResponse[ShoppingListItemResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_shopping_item(
    item_data: ShoppingListItemCreate,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add an item to the shopping list."""
    values = column_values(item_data)
    values["name"] = item_data.name.strip()
    item = ShoppingListItem(**item_attribution(context), **values)
    db.add(item)
    db.commit()
    db.refresh(item)
    return ApiResponse(
        data=ShoppingListItemResponse.model_validate(item), message="Item added to shopping list"
    )


@router.delete("/checked", response_model=MessageResponse)
@router.delete("/clear-checked", response_model=MessageResponse)
def clear_checked_items(
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove every checked item."""
    deleted = (
        db.query(ShoppingListItem)
        .filter(ShoppingListItem.checked.is_(True), *scope_filter(ShoppingListItem, context))
        .delete(synchronize_session=False)
    )
    db.commit()
    return MessageResponse(message=f"Cleared {deleted} checked items")


@router.post("/generate", response_model=ApiResponse[list[ShoppingListItemResponse]])
@router.post(
    "/generate-from-low-stock", response_model=ApiResponse[list[ShoppingListItemResponse]]
)
def generate_from_low_stock(
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add low-stock pantry items that are not on the list yet.

    An item counts as already listed when a shopping item links to it, so
    calling this again without pantry changes adds nothing.
    """
    low_stock = (
        db.query(PantryItem)
        .filter(PantryItem.quantity <= LOW_STOCK_THRESHOLD, *scope_filter(PantryItem, context))
        .order_by(PantryItem.name)
        .all()
    )
    if not low_stock:
        return ApiResponse(data=[], message="No low stock items found")

    linked_ids = {
        pantry_item_id
        for (pantry_item_id,) in db.query(ShoppingListItem.pantry_item_id)
        .filter(
            ShoppingListItem.pantry_item_id.in_([p.id for p in low_stock]),
            *scope_filter(ShoppingListItem, context),
        )
        .all()
    }

    new_items = []
    with transaction(db):
        for pantry_item in low_stock:
            if pantry_item.id in linked_ids:
                continue
            item = ShoppingListItem(
                **item_attribution(context),
                name=pantry_item.name,
                quantity=1,
                unit=pantry_item.unit,
                category=pantry_item.category,
                priority=ShoppingPriority.NORMAL.value,
                pantry_item_id=pantry_item.id,
            )
            db.add(item)
            new_items.append(item)

    for item in new_items:
        db.refresh(item)
    logger.info(f"Added {len(new_items)} low stock items for user {context.user_id}")
    return ApiResponse(
        data=_to_response(new_items), message=f"Added {len(new_items)} items from low stock"
    )


@router.put("/{item_id}", response_model=ApiResponse[ShoppingListItemResponse])
def update_shopping_item(
    item_id: int,
    item_data: ShoppingListItemUpdate,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the fields present in the request body."""
    item = get_scoped_shopping_item(db, item_id, context)
    apply_patch(item, item_data, non_nullable={"name", "quantity", "priority", "checked"})
    db.commit()
    db.refresh(item)
    return ApiResponse(data=ShoppingListItemResponse.model_validate(item), message="Item updated")


@router.api_route(
    "/{item_id}/toggle",
    methods=["PUT", "PATCH"],
    response_model=ApiResponse[ShoppingListItemResponse],
)
def toggle_shopping_item(
    item_id: int,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Flip the checked state of an item."""
    item = get_scoped_shopping_item(db, item_id, context)
    item.checked = not item.checked
    db.commit()
    db.refresh(item)
    return ApiResponse(
        data=ShoppingListItemResponse.model_validate(item),
        message="Item checked" if item.checked else "Item unchecked",
    )


@router.post("/{item_id}/to-pantry", response_model=ApiResponse[PantryItemResponse])
@router.post("/{item_id}/add-to-pantry", response_model=ApiResponse[PantryItemResponse])
def move_to_pantry(
    item_id: int,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Move a bought item into the pantry and off the list.

    Restocks the linked pantry item when it still exists, otherwise creates a
    new pantry item.
    """
    item = get_scoped_shopping_item(db, item_id, context)

    pantry_item = None
    if item.pantry_item_id is not None:
        pantry_item = (
            db.query(PantryItem)
            .filter(PantryItem.id == item.pantry_item_id, *scope_filter(PantryItem, context))
            .first()
        )

    with transaction(db):
        if pantry_item is not None:
            pantry_item.quantity = pantry_item.quantity + item.quantity
            message = f"Added {item.quantity:g} to existing pantry item"
        else:
            category = item.category
            if category not in {c.value for c in PantryCategory}:
                category = None
            pantry_item = PantryItem(
                **item_attribution(context),
                name=item.name,
                quantity=item.quantity,
                unit=item.unit,
                category=category,
            )
            db.add(pantry_item)
            message = "Item added to pantry"
        db.delete(item)

    db.refresh(pantry_item)
    return ApiResponse(data=PantryItemResponse.model_validate(pantry_item), message=message)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_shopping_item(
    item_id: int,
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove an item from the shopping list."""
    item = get_scoped_shopping_item(db, item_id, context)
    db.delete(item)
    db.commit()
    return MessageResponse(message="Item removed from shopping list")
