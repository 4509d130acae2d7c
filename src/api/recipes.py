"""Saved recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.errors import ConflictError, NotFoundError
from src.models.recipe import SavedRecipe
from src.models.user import User
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.recipe import SavedRecipeCreate, SavedRecipeResponse, SavedRecipeUpdate
from src.services.patching import apply_patch, column_values

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

DUPLICATE_TITLE_MESSAGE = "You already have a recipe with this title saved"


def get_user_recipe(db: Session, recipe_id: int, user: User) -> SavedRecipe:
    """Get a saved recipe that belongs to the user."""
    recipe = (
        db.query(SavedRecipe)
        .filter(SavedRecipe.id == recipe_id, SavedRecipe.user_id == user.id)
        .first()
    )
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


def title_taken(db: Session, user: User, title: str, exclude_id: int | None = None) -> bool:
    """Check for another saved recipe with the same title, ignoring case."""
    query = db.query(SavedRecipe.id).filter(
        SavedRecipe.user_id == user.id,
        func.lower(SavedRecipe.title) == title.strip().lower(),
    )
    if exclude_id is not None:
        query = query.filter(SavedRecipe.id != exclude_id)
    return query.first() is not None


@router.get("", response_model=ApiResponse[list[SavedRecipeResponse]])
def list_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    favorites: bool = False,
    custom: bool = False,
):
    """List saved recipes, newest first."""
    query = db.query(SavedRecipe).filter(SavedRecipe.user_id == current_user.id)
    if favorites:
        query = query.filter(SavedRecipe.is_favorite.is_(True))
    if custom:
        query = query.filter(SavedRecipe.is_custom.is_(True))
    recipes = query.order_by(SavedRecipe.created_at.desc(), SavedRecipe.id.desc()).all()
    return ApiResponse(data=[SavedRecipeResponse.model_validate(r) for r in recipes])


@router.get("/{recipe_id}", response_model=ApiResponse[SavedRecipeResponse])
def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific saved recipe."""
    recipe = get_user_recipe(db, recipe_id, current_user)
    return ApiResponse(data=SavedRecipeResponse.model_validate(recipe))


@router.post(
    "",
    response_model=ApiResponse[SavedRecipeResponse],
    status_code=status.HTTP_201_CREATED,
)
def save_recipe(
    recipe_data: SavedRecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Save a recipe to the cookbook."""
    if title_taken(db, current_user, recipe_data.title):
        raise ConflictError(DUPLICATE_TITLE_MESSAGE)

    values = column_values(recipe_data)
    values["title"] = recipe_data.title.strip()
    recipe = SavedRecipe(user_id=current_user.id, **values)
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return ApiResponse(data=SavedRecipeResponse.model_validate(recipe), message="Recipe saved")


@router.put("/{recipe_id}", response_model=ApiResponse[SavedRecipeResponse])
def update_recipe(
    recipe_id: int,
    recipe_data: SavedRecipeUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the fields present in the request body."""
    recipe = get_user_recipe(db, recipe_id, current_user)
    if recipe_data.title is not None and title_taken(
        db, current_user, recipe_data.title, exclude_id=recipe.id
    ):
        raise ConflictError(DUPLICATE_TITLE_MESSAGE)

    apply_patch(
        recipe,
        recipe_data,
        non_nullable={
            "title", "minutes", "servings", "tags", "kcal", "protein", "carbs", "fat",
            "ingredients", "steps", "is_favorite", "is_custom",
        },
    )
    db.commit()
    db.refresh(recipe)
    return ApiResponse(data=SavedRecipeResponse.model_validate(recipe), message="Recipe updated")


@router.put("/{recipe_id}/favorite", response_model=ApiResponse[SavedRecipeResponse])
def toggle_favorite(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Flip the favorite flag of a recipe."""
    recipe = get_user_recipe(db, recipe_id, current_user)
    recipe.is_favorite = not recipe.is_favorite
    db.commit()
    db.refresh(recipe)
    return ApiResponse(
        data=SavedRecipeResponse.model_validate(recipe),
        message="Added to favorites" if recipe.is_favorite else "Removed from favorites",
    )


@router.delete("/{recipe_id}", response_model=MessageResponse)
def delete_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a saved recipe."""
    recipe = get_user_recipe(db, recipe_id, current_user)
    db.delete(recipe)
    db.commit()
    return MessageResponse(message="Recipe deleted")
