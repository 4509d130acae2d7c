"""AI generation schemas."""

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Free-form prompt for the model."""

    prompt: str = Field("", max_length=10000)


class GenerateResponse(BaseModel):
    text: str


class RecipeGenerationRequest(BaseModel):
    """Ask for recipes based on the current pantry."""

    user_prompt: str | None = Field(None, max_length=1000)
    count: int = Field(3, ge=1, le=10)
