"""AI generation API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    get_current_user,
    get_household_context,
    get_llm_service,
    get_recipe_generator,
)
from src.errors import UpstreamError, ValidationFailedError
from src.models.user import User
from src.schemas.ai import GenerateRequest, GenerateResponse, RecipeGenerationRequest
from src.schemas.common import ApiResponse
from src.schemas.recipe import GeneratedRecipe
from src.services.household import HouseholdContext
from src.services.llm import LLMService
from src.services.recipe_generator import RecipeGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("", response_model=ApiResponse[GenerateResponse])
async def generate_content(
    request: GenerateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
):
    """Send a free-form prompt to the model."""
    if not request.prompt.strip():
        raise ValidationFailedError("Prompt is required")

    try:
        text = await llm_service.generate(request.prompt)
    except Exception as e:
        logger.error(f"LLM generation failed for user {current_user.id}: {e}")
        raise UpstreamError("Error generating content") from e

    return ApiResponse(data=GenerateResponse(text=text))


@router.post("/recipes", response_model=ApiResponse[list[GeneratedRecipe]])
async def generate_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    generator: Annotated[RecipeGenerator, Depends(get_recipe_generator)],
    request: RecipeGenerationRequest | None = None,
):
    """Suggest recipes that use up what is in the pantry."""
    request = request or RecipeGenerationRequest()
    recipes = await generator.generate(
        current_user, context, user_prompt=request.user_prompt, count=request.count
    )
    return ApiResponse(data=recipes, message=f"Generated {len(recipes)} recipes")
