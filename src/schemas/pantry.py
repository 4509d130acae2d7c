"""Pantry schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import PantryCategory, StorageLocation


class Macros(BaseModel):
    """Nutrition per serving."""

    kcal: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    serving: str | None = None


class PantryItemCreate(BaseModel):
    """Create a pantry item."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(1, ge=0)
    unit: str | None = Field(None, max_length=255)
    expiration_date: datetime | None = None
    category: PantryCategory | None = None
    storage_location: StorageLocation = StorageLocation.PANTRY
    barcode: str | None = Field(None, max_length=64)
    image_url: str | None = Field(None, max_length=1024)
    notes: str | None = None
    macros: Macros | None = None
    # Fill a missing expiration date from the shelf-life estimate
    use_suggested_expiration: bool = False


class PantryItemUpdate(BaseModel):
    """Partial update of a pantry item. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=255)
    expiration_date: datetime | None = None
    category: PantryCategory | None = None
    storage_location: StorageLocation | None = None
    barcode: str | None = Field(None, max_length=64)
    image_url: str | None = Field(None, max_length=1024)
    notes: str | None = None
    macros: Macros | None = None


class PantryItemResponse(BaseModel):
    """Pantry item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    household_id: int | None
    created_by_user_id: int | None
    created_by_name: str | None
    name: str
    quantity: float
    unit: str | None
    expiration_date: datetime | None
    category: str | None
    storage_location: str
    barcode: str | None
    image_url: str | None
    notes: str | None
    macros: dict | None
    added_date: datetime
    created_at: datetime
    updated_at: datetime


class ShelfLifeResponse(BaseModel):
    """Estimated shelf life of a product."""

    days: int
    suggested_expiration_date: datetime
    source: str  # "product" | "category" | "generic" | "default"
