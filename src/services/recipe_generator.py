"""Pantry-aware recipe generation."""

import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.errors import UpstreamError, ValidationFailedError
from src.models.pantry import PantryItem
from src.models.recipe import RecipeHistory
from src.models.user import User, default_preferences
from src.schemas.recipe import GeneratedRecipe, RecipeContent
from src.services.dates import as_utc, days_until
from src.services.household import HouseholdContext, item_attribution, scope_filter
from src.services.llm import LLMService
from src.services.llm_prompts import (
    RECIPE_GENERATION_SYSTEM_PROMPT,
    get_recipe_generation_prompt,
)

logger = logging.getLogger(__name__)

EXPIRING_SOON_DAYS = 3
EXPIRING_THIS_WEEK_DAYS = 7


@dataclass
class PantryBuckets:
    """Unexpired pantry items grouped by how soon they must be used."""

    expiring_soon: list[PantryItem] = field(default_factory=list)
    expiring_this_week: list[PantryItem] = field(default_factory=list)
    other: list[PantryItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.expiring_soon) + len(self.expiring_this_week) + len(self.other)


def is_expired(item: PantryItem, now: datetime) -> bool:
    return item.expiration_date is not None and as_utc(item.expiration_date) < now


def bucket_pantry_items(items: list[PantryItem], now: datetime | None = None) -> PantryBuckets:
    """Drop expired items and bucket the rest by days until expiry."""
    now = now or datetime.now(UTC)
    buckets = PantryBuckets()
    for item in items:
        if is_expired(item, now):
            continue
        if item.expiration_date is None:
            buckets.other.append(item)
            continue
        days = days_until(item.expiration_date, now)
        if days <= EXPIRING_SOON_DAYS:
            buckets.expiring_soon.append(item)
        elif days <= EXPIRING_THIS_WEEK_DAYS:
            buckets.expiring_this_week.append(item)
        else:
            buckets.other.append(item)
    return buckets


def describe_item(item: PantryItem) -> str:
    """``"Milk (2 L)"``"""
    amount = f"{item.quantity:g}"
    if item.unit:
        amount = f"{amount} {item.unit}"
    return f"{item.name} ({amount})"


def parse_recipes(raw: Any) -> list[GeneratedRecipe]:
    """Validate model output and give every recipe a fresh id.

    Raises:
        ValueError: The output is not a list of recipe objects.
    """
    if isinstance(raw, dict) and isinstance(raw.get("recipes"), list):
        raw = raw["recipes"]
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON array of recipes, got {type(raw).__name__}")

    recipes = []
    for entry in raw:
        content = RecipeContent.model_validate(entry)
        recipes.append(GeneratedRecipe(id=uuid.uuid4().hex, **content.model_dump()))
    return recipes


class RecipeGenerator:
    """Builds a prompt from pantry state and preferences, then asks the LLM for recipes."""

    def __init__(self, db: Session, llm_service: LLMService | None = None):
        self.db = db
        self.llm_service = llm_service or LLMService()

    def load_buckets(self, context: HouseholdContext) -> PantryBuckets:
        items = (
            self.db.query(PantryItem)
            .filter(*scope_filter(PantryItem, context))
            .order_by(PantryItem.expiration_date, PantryItem.name)
            .all()
        )
        return bucket_pantry_items(items)

    def build_prompt(
        self,
        buckets: PantryBuckets,
        preferences: dict[str, Any] | None,
        user_prompt: str | None = None,
        count: int = 3,
    ) -> str:
        return get_recipe_generation_prompt(
            expiring_soon=[describe_item(i) for i in buckets.expiring_soon],
            expiring_this_week=[describe_item(i) for i in buckets.expiring_this_week],
            other_items=[describe_item(i) for i in buckets.other],
            preferences={**default_preferences(), **(preferences or {})},
            user_prompt=user_prompt,
            count=count,
        )

    async def generate(
        self,
        user: User,
        context: HouseholdContext,
        user_prompt: str | None = None,
        count: int = 3,
    ) -> list[GeneratedRecipe]:
        """Generate recipes and record them in the caller's recipe history.

        Raises:
            ValidationFailedError: No unexpired pantry items; the model is not called.
            UpstreamError: The model call failed or returned unusable output.
        """
        buckets = self.load_buckets(context)
        if not len(buckets):
            raise ValidationFailedError(
                "Your pantry has no usable items. Add items to get recipe suggestions."
            )

        prompt = self.build_prompt(buckets, user.preferences, user_prompt, count)
        logger.info(
            f"Generating {count} recipes for user {user.id} "
            f"from {len(buckets)} pantry items ({len(buckets.expiring_soon)} expiring soon)"
        )

        try:
            raw = await self.llm_service.generate_json(
                prompt=prompt,
                system_prompt=RECIPE_GENERATION_SYSTEM_PROMPT,
            )
        except json.JSONDecodeError as e:
            raise UpstreamError("Failed to parse recipes from AI response") from e
        except Exception as e:
            logger.error(f"Recipe generation failed: {e}")
            raise UpstreamError("Failed to generate recipes") from e

        try:
            recipes = parse_recipes(raw)
        except (ValueError, ValidationError) as e:
            logger.warning(f"AI returned malformed recipes: {e}")
            raise UpstreamError("Failed to parse recipes from AI response") from e

        history = RecipeHistory(
            **item_attribution(context),
            prompt=user_prompt,
            recipes=[r.model_dump() for r in recipes],
        )
        self.db.add(history)
        self.db.commit()

        return recipes
