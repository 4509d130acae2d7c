"""User preference schemas."""

from pydantic import BaseModel, Field


class UserPreferences(BaseModel):
    """Dietary preferences used when generating recipes.

    Replaced as a whole on update: omitted fields fall back to defaults.
    """

    dietary_preferences: list[str] = []
    allergies: list[str] = []
    custom_allergies: str = Field("", max_length=500)
    avoid_ingredients: str = Field("", max_length=500)
    calorie_target: int = Field(0, ge=0)
    protein_target: int = Field(0, ge=0)
    cuisine_preferences: str = Field("", max_length=500)
