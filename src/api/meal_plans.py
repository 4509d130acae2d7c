"""Meal plan API endpoints."""

import logging
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_household_context
from src.database import get_db, transaction
from src.errors import NotFoundError
from src.models.enums import ShoppingPriority
from src.models.meal_plan import MealPlan
from src.models.pantry import PantryItem
from src.models.shopping_list import ShoppingListItem
from src.models.user import User
from src.schemas.common import ApiResponse, MessageResponse
from src.schemas.meal_plan import (
    DateRange,
    IngredientComparison,
    IngredientSummary,
    MealPlanCreate,
    MealPlanResponse,
    MealPlanUpdate,
    PantryStock,
)
from src.schemas.shopping_list import ShoppingListItemResponse
from src.services.dates import as_utc, end_of_week, start_of_week
from src.services.household import HouseholdContext, item_attribution, scope_filter
from src.services.patching import apply_patch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/meal-plans", tags=["meal-plans"])

MEAL_PLAN_CATEGORY = "Meal Plan"

UNIT_MAX_LENGTH = ShoppingListItem.__table__.c.unit.type.length


def get_user_meal_plan(db: Session, meal_plan_id: int, user: User) -> MealPlan:
    """Get a meal plan that belongs to the user."""
    meal = (
        db.query(MealPlan)
        .filter(MealPlan.id == meal_plan_id, MealPlan.user_id == user.id)
        .first()
    )
    if not meal:
        raise NotFoundError("Meal plan not found")
    return meal


def resolve_range(
    start_date: datetime | None, end_date: datetime | None
) -> tuple[datetime, datetime]:
    """Requested window in UTC, defaulting to the current Monday-Sunday week."""
    now = datetime.now(UTC)
    start = as_utc(start_date) if start_date else start_of_week(now)
    end = as_utc(end_date) if end_date else end_of_week(now)
    return start, end


def uncompleted_meals(db: Session, user: User, start: datetime, end: datetime) -> list[MealPlan]:
    return (
        db.query(MealPlan)
        .filter(
            MealPlan.user_id == user.id,
            MealPlan.date >= start,
            MealPlan.date <= end,
            MealPlan.completed.is_(False),
        )
        .order_by(MealPlan.date)
        .all()
    )


def aggregate_ingredients(meals: list[MealPlan]) -> dict[str, dict[str, Any]]:
    """Merge ingredients across meals by normalized name.

    Returns ``{normalized_name: {"name": first spelling, "amounts": [...]}}``
    in first-seen order.
    """
    ingredients: dict[str, dict[str, Any]] = {}
    for meal in meals:
        for ingredient in (meal.recipe or {}).get("ingredients", []):
            name = (ingredient.get("name") or "").strip()
            if not name:
                continue
            key = name.lower()
            entry = ingredients.setdefault(key, {"name": name, "amounts": []})
            amount = str(ingredient.get("amount") or "").strip()
            if amount:
                entry["amounts"].append(amount)
    return ingredients


def joined_amounts(amounts: list[str]) -> str | None:
    """Amounts as one shopping list unit, cut to fit the column."""
    unit = ", ".join(amounts)
    if len(unit) > UNIT_MAX_LENGTH:
        unit = unit[: UNIT_MAX_LENGTH - 3].rstrip(", ") + "..."
    return unit or None


def _pantry_by_name(db: Session, context: HouseholdContext) -> dict[str, PantryItem]:
    items = db.query(PantryItem).filter(*scope_filter(PantryItem, context)).all()
    return {item.name.lower().strip(): item for item in items}


@router.get("", response_model=ApiResponse[list[MealPlanResponse]])
def list_meal_plans(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    start_date: datetime | None = None,
    end_date: datetime | None = None,
):
    """List planned meals in a date range (default: this week)."""
    start, end = resolve_range(start_date, end_date)
    meals = (
        db.query(MealPlan)
        .filter(MealPlan.user_id == current_user.id, MealPlan.date >= start, MealPlan.date <= end)
        .order_by(MealPlan.date, MealPlan.meal_type)
        .all()
    )
    return ApiResponse(data=[MealPlanResponse.model_validate(m) for m in meals])


@router.get("/ingredients", response_model=ApiResponse[IngredientSummary])
def get_ingredient_comparison(
    current_user: Annotated[User, Depends(get_current_user)],
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
    start_date: datetime | None = None,
    end_date: datetime | None = None,
):
    """Compare the ingredients of upcoming meals with the pantry."""
    start, end = resolve_range(start_date, end_date)
    meals = uncompleted_meals(db, current_user, start, end)
    pantry = _pantry_by_name(db, context)

    comparison = []
    for key, entry in aggregate_ingredients(meals).items():
        pantry_item = pantry.get(key)
        comparison.append(
            IngredientComparison(
                ingredient=entry["name"],
                amounts_needed=entry["amounts"],
                in_pantry=(
                    PantryStock(quantity=pantry_item.quantity, unit=pantry_item.unit)
                    if pantry_item
                    else None
                ),
                status="have" if pantry_item else "need",
            )
        )

    return ApiResponse(
        data=IngredientSummary(
            total_meals=len(meals),
            ingredients=comparison,
            needed=[c for c in comparison if c.status == "need"],
            have=[c for c in comparison if c.status == "have"],
        )
    )


@router.post(
    "/generate-shopping-list",
    response_model=ApiResponse[list[ShoppingListItemResponse]],
)
def generate_shopping_list(
    current_user: Annotated[User, Depends(get_current_user)],
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
    date_range: Annotated[DateRange | None, Body()] = None,
):
    """Add planned ingredients that are neither in the pantry nor on the list."""
    date_range = date_range or DateRange()
    start, end = resolve_range(date_range.start_date, date_range.end_date)
    meals = uncompleted_meals(db, current_user, start, end)
    pantry = _pantry_by_name(db, context)
    listed = {
        name.lower().strip()
        for (name,) in db.query(ShoppingListItem.name)
        .filter(*scope_filter(ShoppingListItem, context))
        .all()
    }

    new_items = []
    with transaction(db):
        for key, entry in aggregate_ingredients(meals).items():
            if key in pantry or key in listed:
                continue
            item = ShoppingListItem(
                **item_attribution(context),
                name=entry["name"],
                quantity=1,
                unit=joined_amounts(entry["amounts"]),
                category=MEAL_PLAN_CATEGORY,
                priority=ShoppingPriority.NORMAL.value,
            )
            db.add(item)
            new_items.append(item)

    for item in new_items:
        db.refresh(item)
    logger.info(f"Added {len(new_items)} meal plan ingredients for user {current_user.id}")
    return ApiResponse(
        data=[ShoppingListItemResponse.model_validate(i) for i in new_items],
        message=f"Added {len(new_items)} items to shopping list from meal plan",
    )


@router.post(
    "",
    response_model=ApiResponse[MealPlanResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_meal_plan(
    meal_data: MealPlanCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add a meal to the plan."""
    meal = MealPlan(
        user_id=current_user.id,
        date=as_utc(meal_data.date),
        meal_type=meal_data.meal_type.value,
        recipe=meal_data.recipe.model_dump(mode="json"),
        notes=meal_data.notes,
    )
    db.add(meal)
    db.commit()
    db.refresh(meal)
    return ApiResponse(data=MealPlanResponse.model_validate(meal), message="Meal added to plan")


@router.put("/{meal_plan_id}", response_model=ApiResponse[MealPlanResponse])
def update_meal_plan(
    meal_plan_id: int,
    meal_data: MealPlanUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the fields present in the request body."""
    meal = get_user_meal_plan(db, meal_plan_id, current_user)
    changes = apply_patch(
        meal, meal_data, non_nullable={"date", "meal_type", "recipe", "completed"}
    )
    if "date" in changes:
        meal.date = as_utc(changes["date"])
    db.commit()
    db.refresh(meal)
    return ApiResponse(data=MealPlanResponse.model_validate(meal), message="Meal plan updated")


@router.put("/{meal_plan_id}/toggle", response_model=ApiResponse[MealPlanResponse])
def toggle_meal_plan(
    meal_plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Flip the completed state of a meal."""
    meal = get_user_meal_plan(db, meal_plan_id, current_user)
    meal.completed = not meal.completed
    db.commit()
    db.refresh(meal)
    return ApiResponse(
        data=MealPlanResponse.model_validate(meal),
        message="Meal marked as completed" if meal.completed else "Meal marked as not completed",
    )


@router.delete("/{meal_plan_id}", response_model=MessageResponse)
def delete_meal_plan(
    meal_plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a meal from the plan."""
    meal = get_user_meal_plan(db, meal_plan_id, current_user)
    db.delete(meal)
    db.commit()
    return MessageResponse(message="Meal removed from plan")
