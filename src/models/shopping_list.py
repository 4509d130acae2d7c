"""Shopping list item model."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, Integer, String
from sqlalchemy.orm import validates

from src.database import Base
from src.models.mixins import OwnershipMixin, TimestampMixin


class ShoppingListItem(Base, TimestampMixin, OwnershipMixin):
    """Item on a personal or household shopping list."""

    __tablename__ = "shopping_list_items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_shopping_quantity_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    unit = Column(String(255), nullable=True)
    checked = Column(Boolean, nullable=False, default=False, index=True)
    # Back-reference to the pantry item this restocks; the item may be gone since
    pantry_item_id = Column(Integer, nullable=True, index=True)
    category = Column(String(50), nullable=True)
    priority = Column(String(10), nullable=False, default="normal")  # "low" | "normal" | "high"
    added_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))

    @validates("quantity")
    def validate_quantity(self, key, value):
        if value is not None and value < 0:
            raise ValueError("Quantity cannot be negative")
        return value
