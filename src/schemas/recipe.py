"""Recipe schemas: saved recipes, generated recipes and recipe history."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# --- Recipe content ---


class RecipeIngredient(BaseModel):
    """One ingredient line of a recipe."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1, max_length=255)
    amount: str = Field("", max_length=255)


class RecipeContent(BaseModel):
    """Recipe body shared by meal plans, saved recipes and AI output."""

    title: str = Field(..., min_length=1, max_length=255)
    minutes: int = Field(0, ge=0)
    servings: int = Field(1, ge=1)
    tags: list[str] = []
    kcal: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    ingredients: list[RecipeIngredient] = []
    steps: list[str] = []


class GeneratedRecipe(RecipeContent):
    """AI-generated recipe, identified for the client by a random id."""

    id: str


# --- Saved Recipe ---


class SavedRecipeCreate(RecipeContent):
    """Save a recipe to the user's cookbook."""

    ingredients: list[RecipeIngredient]
    steps: list[str]
    is_custom: bool = False
    notes: str | None = None


class SavedRecipeUpdate(BaseModel):
    """Partial update of a saved recipe."""

    title: str | None = Field(None, min_length=1, max_length=255)
    minutes: int | None = Field(None, ge=0)
    servings: int | None = Field(None, ge=1)
    tags: list[str] | None = None
    kcal: float | None = Field(None, ge=0)
    protein: float | None = Field(None, ge=0)
    carbs: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)
    ingredients: list[RecipeIngredient] | None = None
    steps: list[str] | None = None
    is_favorite: bool | None = None
    is_custom: bool | None = None
    notes: str | None = None


class SavedRecipeResponse(RecipeContent):
    """Saved recipe response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    is_favorite: bool
    is_custom: bool
    notes: str | None
    created_at: datetime
    updated_at: datetime


# --- Recipe History ---


class RecipeHistoryResponse(BaseModel):
    """One batch of generated recipes."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    household_id: int | None
    created_by_user_id: int | None
    created_by_name: str | None
    prompt: str | None
    recipes: list[dict]
    created_at: datetime
