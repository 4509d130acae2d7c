"""Meal plan model."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text

from src.database import Base
from src.models.mixins import TimestampMixin


class MealPlan(Base, TimestampMixin):
    """A recipe scheduled for a meal slot on a given day."""

    __tablename__ = "meal_plans"
    __table_args__ = (Index("ix_meal_plans_user_date_meal", "user_id", "date", "meal_type"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    meal_type = Column(String(20), nullable=False)  # MealType value
    # Embedded recipe snapshot: title, minutes, servings, tags, macros, ingredients, steps
    recipe = Column(JSON, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
