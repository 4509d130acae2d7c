"""Meal plan schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import MealType
from src.schemas.recipe import RecipeContent


class MealPlanCreate(BaseModel):
    """Schedule a recipe for a meal slot."""

    date: datetime
    meal_type: MealType
    recipe: RecipeContent
    notes: str | None = Field(None, max_length=1000)


class MealPlanUpdate(BaseModel):
    """Partial update of a planned meal."""

    date: datetime | None = None
    meal_type: MealType | None = None
    recipe: RecipeContent | None = None
    completed: bool | None = None
    notes: str | None = Field(None, max_length=1000)


class MealPlanResponse(BaseModel):
    """Planned meal response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    date: datetime
    meal_type: str
    recipe: dict
    completed: bool
    notes: str | None
    created_at: datetime
    updated_at: datetime


class DateRange(BaseModel):
    """Optional date window; defaults to the current Monday-Sunday week."""

    start_date: datetime | None = None
    end_date: datetime | None = None


class PantryStock(BaseModel):
    quantity: float
    unit: str | None


class IngredientComparison(BaseModel):
    """A planned ingredient and whether the pantry already has it."""

    ingredient: str
    amounts_needed: list[str]
    in_pantry: PantryStock | None
    status: str  # "have" | "need"


class IngredientSummary(BaseModel):
    """Ingredients of the uncompleted meals in a date range."""

    total_meals: int
    ingredients: list[IngredientComparison]
    needed: list[IngredientComparison]
    have: list[IngredientComparison]
