"""Pantry item model for tracking what is stocked at home."""

from datetime import UTC, datetime

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import validates

from src.database import Base
from src.models.mixins import OwnershipMixin, TimestampMixin


class PantryItem(Base, TimestampMixin, OwnershipMixin):
    """Pantry item owned by a user or shared with a household."""

    __tablename__ = "pantry_items"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_pantry_quantity_non_negative"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    unit = Column(String(255), nullable=True)
    expiration_date = Column(DateTime(timezone=True), nullable=True, index=True)
    category = Column(String(50), nullable=True)  # PantryCategory value
    storage_location = Column(String(20), nullable=False, default="Pantry")  # StorageLocation
    barcode = Column(String(64), nullable=True)
    image_url = Column(String(1024), nullable=True)
    notes = Column(Text, nullable=True)
    # {"kcal": 150, "protein": 8, "carbs": 12, "fat": 8, "serving": "1 cup"}
    macros = Column(JSON, nullable=True)
    added_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))

    @validates("quantity")
    def validate_quantity(self, key, value):
        if value is not None and value < 0:
            raise ValueError("Quantity cannot be negative")
        return value
