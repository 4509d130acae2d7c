"""Shopping list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import ShoppingPriority


class ShoppingListItemCreate(BaseModel):
    """Add an item to the shopping list."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(1, ge=0)
    unit: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=50)
    priority: ShoppingPriority = ShoppingPriority.NORMAL
    pantry_item_id: int | None = None


class ShoppingListItemUpdate(BaseModel):
    """Partial update of a shopping list item."""

    name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=50)
    priority: ShoppingPriority | None = None
    checked: bool | None = None


class ShoppingListItemResponse(BaseModel):
    """Shopping list item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    household_id: int | None
    created_by_user_id: int | None
    created_by_name: str | None
    name: str
    quantity: float
    unit: str | None
    checked: bool
    pantry_item_id: int | None
    category: str | None
    priority: str
    added_date: datetime
    created_at: datetime
    updated_at: datetime
