"""Saved recipe and recipe history models."""

from sqlalchemy import JSON, Boolean, Column, Float, ForeignKey, Integer, String, Text

from src.database import Base
from src.models.mixins import OwnershipMixin, TimestampMixin


class SavedRecipe(Base, TimestampMixin):
    """Recipe kept in a user's personal cookbook."""

    __tablename__ = "saved_recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False, index=True)
    minutes = Column(Integer, nullable=False, default=0)
    servings = Column(Integer, nullable=False, default=1)
    tags = Column(JSON, nullable=False, default=list)

    # Macros per serving
    kcal = Column(Float, nullable=False, default=0)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)

    ingredients = Column(JSON, nullable=False, default=list)  # [{"name": ..., "amount": ...}]
    steps = Column(JSON, nullable=False, default=list)
    is_favorite = Column(Boolean, nullable=False, default=False)
    is_custom = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)


class RecipeHistory(Base, TimestampMixin, OwnershipMixin):
    """Snapshot of one batch of AI-generated recipes."""

    __tablename__ = "recipe_history"

    id = Column(Integer, primary_key=True, index=True)
    prompt = Column(Text, nullable=True)
    recipes = Column(JSON, nullable=False, default=list)
