"""SQLAlchemy models."""

from src.models.feedback import Feedback
from src.models.household import Household, HouseholdMember
from src.models.meal_plan import MealPlan
from src.models.pantry import PantryItem
from src.models.recipe import RecipeHistory, SavedRecipe
from src.models.shopping_list import ShoppingListItem
from src.models.user import User

__all__ = [
    "User",
    "Household",
    "HouseholdMember",
    "PantryItem",
    "ShoppingListItem",
    "MealPlan",
    "SavedRecipe",
    "RecipeHistory",
    "Feedback",
]
