"""LLM prompt templates for pantry-aware recipe generation."""

from typing import Any

RECIPE_GENERATION_SYSTEM_PROMPT = """You are a home cooking assistant. Suggest practical recipes built from the user's pantry.

Priorities:
1. Use ingredients that expire soonest first
2. Never include an ingredient the user is allergic to or wants to avoid
3. Respect dietary preferences strictly (e.g., vegetarian means no meat or fish)
4. Common staples (salt, pepper, oil, water) may be assumed even if not listed

Respond ONLY with a valid JSON array. No prose, no markdown."""

RECIPE_JSON_FORMAT = """[
  {
    "title": "string",
    "minutes": number,
    "servings": number,
    "tags": ["string", ...],
    "kcal": number,
    "protein": number,
    "carbs": number,
    "fat": number,
    "ingredients": [{"name": "string", "amount": "string"}, ...],
    "steps": ["string", ...]
  }
]"""


def _format_items(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items) if items else "- (none)"


def get_recipe_generation_prompt(
    expiring_soon: list[str],
    expiring_this_week: list[str],
    other_items: list[str],
    preferences: dict[str, Any],
    user_prompt: str | None = None,
    count: int = 3,
) -> str:
    """Generate prompt for suggesting recipes from pantry contents.

    Args:
        expiring_soon: Items expiring within 3 days, e.g. "Milk (1 L)"
        expiring_this_week: Items expiring within 7 days
        other_items: Items expiring later or without an expiration date
        preferences: Stored user preferences (see ``default_preferences``)
        user_prompt: Optional free-text request from the user
        count: Number of recipes to ask for
    """
    sections = [
        "My pantry inventory:",
        "",
        "USE FIRST - expiring within 3 days:",
        _format_items(expiring_soon),
        "",
        "Expiring within 7 days:",
        _format_items(expiring_this_week),
        "",
        "Other items:",
        _format_items(other_items),
    ]

    constraints = []
    dietary = preferences.get("dietary_preferences") or []
    if dietary:
        constraints.append(f"Dietary preferences: {', '.join(dietary)}")

    allergies = list(preferences.get("allergies") or [])
    custom_allergies = (preferences.get("custom_allergies") or "").strip()
    if custom_allergies:
        allergies.append(custom_allergies)
    if allergies:
        constraints.append(f"Allergies (must NOT appear in any recipe): {', '.join(allergies)}")

    avoid = (preferences.get("avoid_ingredients") or "").strip()
    if avoid:
        constraints.append(f"Ingredients to avoid: {avoid}")

    if preferences.get("calorie_target"):
        constraints.append(
            f"Target calories per serving: about {preferences['calorie_target']} kcal"
        )
    if preferences.get("protein_target"):
        constraints.append(f"Target protein per serving: about {preferences['protein_target']} g")

    cuisines = (preferences.get("cuisine_preferences") or "").strip()
    if cuisines:
        constraints.append(f"Preferred cuisines: {cuisines}")

    if constraints:
        sections += ["", "Constraints:", *(f"- {c}" for c in constraints)]

    if user_prompt and user_prompt.strip():
        sections += ["", f'Special request: "{user_prompt.strip()}"']

    sections += [
        "",
        f"Suggest {count} recipes. Prefer the USE FIRST items.",
        "Macros (kcal, protein, carbs, fat in grams) are per serving.",
        "Respond with a JSON array only, in exactly this format:",
        RECIPE_JSON_FORMAT,
    ]
    return "\n".join(sections)
