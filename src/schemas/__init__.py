"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.household import HouseholdCreate, HouseholdResponse, HouseholdUpdate
from src.schemas.meal_plan import MealPlanCreate, MealPlanResponse, MealPlanUpdate
from src.schemas.pantry import PantryItemCreate, PantryItemResponse, PantryItemUpdate
from src.schemas.recipe import (
    GeneratedRecipe,
    RecipeContent,
    SavedRecipeCreate,
    SavedRecipeResponse,
    SavedRecipeUpdate,
)
from src.schemas.shopping_list import (
    ShoppingListItemCreate,
    ShoppingListItemResponse,
    ShoppingListItemUpdate,
)

__all__ = [
    "ApiResponse",
    "MessageResponse",
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "HouseholdCreate",
    "HouseholdUpdate",
    "HouseholdResponse",
    "PantryItemCreate",
    "PantryItemUpdate",
    "PantryItemResponse",
    "ShoppingListItemCreate",
    "ShoppingListItemUpdate",
    "ShoppingListItemResponse",
    "MealPlanCreate",
    "MealPlanUpdate",
    "MealPlanResponse",
    "RecipeContent",
    "GeneratedRecipe",
    "SavedRecipeCreate",
    "SavedRecipeUpdate",
    "SavedRecipeResponse",
]
