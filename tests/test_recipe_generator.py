"""Tests for pantry-aware recipe generation."""

import json
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from src.models.pantry import PantryItem
from src.models.recipe import RecipeHistory
from src.services.llm import LLMService, strip_code_fences
from src.services.llm_prompts import get_recipe_generation_prompt
from src.services.recipe_generator import bucket_pantry_items, describe_item, parse_recipes

NOW = datetime(2030, 3, 4, 12, 0, tzinfo=UTC)

GENERATED = [
    {
        "title": "Milk Rice Pudding",
        "minutes": 40,
        "servings": 4,
        "tags": ["dessert"],
        "kcal": 280,
        "protein": 8,
        "carbs": 50,
        "fat": 5,
        "ingredients": [{"name": "Milk", "amount": "1 L"}, {"name": "Rice", "amount": 150}],
        "steps": ["Simmer rice in milk", "Sweeten"],
    },
    {
        "title": "Spinach Omelette",
        "minutes": 10,
        "servings": 1,
        "ingredients": [{"name": "Eggs", "amount": "3"}, {"name": "Spinach", "amount": "1 cup"}],
        "steps": ["Whisk", "Fry"],
    },
]


def pantry_item(name, days=None, quantity=1, unit=None):
    expiration = NOW + timedelta(days=days) if days is not None else None
    return PantryItem(name=name, quantity=quantity, unit=unit, expiration_date=expiration)


# --- Bucketing and prompt ---


def test_bucket_pantry_items():
    items = [
        pantry_item("Spinach", days=1),
        pantry_item("Yogurt", days=3),
        pantry_item("Cheese", days=6),
        pantry_item("Butter", days=30),
        pantry_item("Rice"),
        pantry_item("Old Milk", days=-1),
    ]

    buckets = bucket_pantry_items(items, now=NOW)

    assert [i.name for i in buckets.expiring_soon] == ["Spinach", "Yogurt"]
    assert [i.name for i in buckets.expiring_this_week] == ["Cheese"]
    assert [i.name for i in buckets.other] == ["Butter", "Rice"]
    assert len(buckets) == 5


def test_bucket_boundaries_round_up_partial_days():
    # A little over 3 days counts as 4 days away
    items = [pantry_item("Ham", days=3.05), pantry_item("Peas", days=7.05)]

    buckets = bucket_pantry_items(items, now=NOW)

    assert [i.name for i in buckets.expiring_this_week] == ["Ham"]
    assert [i.name for i in buckets.other] == ["Peas"]


def test_describe_item():
    assert describe_item(pantry_item("Milk", quantity=2, unit="L")) == "Milk (2 L)"
    assert describe_item(pantry_item("Eggs", quantity=12)) == "Eggs (12)"
    assert describe_item(pantry_item("Flour", quantity=0.5, unit="kg")) == "Flour (0.5 kg)"


def test_prompt_includes_buckets_and_constraints():
    prompt = get_recipe_generation_prompt(
        expiring_soon=["Spinach (1 bag)"],
        expiring_this_week=["Cheese (200 g)"],
        other_items=[],
        preferences={
            "dietary_preferences": ["vegetarian"],
            "allergies": ["peanuts"],
            "custom_allergies": "kiwi",
            "avoid_ingredients": "cilantro",
            "calorie_target": 600,
            "protein_target": 0,
            "cuisine_preferences": "Italian",
        },
        user_prompt="  something quick ",
        count=2,
    )

    soon = prompt.index("USE FIRST")
    week = prompt.index("Expiring within 7 days")
    assert soon < prompt.index("Spinach (1 bag)") < week < prompt.index("Cheese (200 g)")
    assert "Other items:\n- (none)" in prompt
    assert "Dietary preferences: vegetarian" in prompt
    assert "peanuts, kiwi" in prompt
    assert "Ingredients to avoid: cilantro" in prompt
    assert "about 600 kcal" in prompt
    assert "protein per serving" not in prompt
    assert "Preferred cuisines: Italian" in prompt
    assert 'Special request: "something quick"' in prompt
    assert "Suggest 2 recipes" in prompt


def test_prompt_without_preferences_has_no_constraints():
    prompt = get_recipe_generation_prompt(["Milk (1 L)"], [], [], preferences={})
    assert "Constraints:" not in prompt
    assert "Special request" not in prompt


# --- Parsing model output ---


def test_parse_recipes_assigns_ids():
    recipes = parse_recipes(GENERATED)

    assert [r.title for r in recipes] == ["Milk Rice Pudding", "Spinach Omelette"]
    assert recipes[0].ingredients[1].amount == "150"
    assert recipes[1].tags == []
    assert recipes[0].id != recipes[1].id


def test_parse_recipes_accepts_wrapped_object():
    recipes = parse_recipes({"recipes": GENERATED[:1]})
    assert len(recipes) == 1


@pytest.mark.parametrize("raw", [{"title": "Soup"}, "Soup", None, [{"minutes": 10}]])
def test_parse_recipes_rejects_malformed_output(raw):
    with pytest.raises(ValueError):
        parse_recipes(raw)


def test_strip_code_fences():
    assert strip_code_fences('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'
    assert strip_code_fences("```\n[]\n```") == "[]"
    assert strip_code_fences("  [] ") == "[]"


@pytest.mark.asyncio
async def test_generate_json_parses_fenced_response():
    service = LLMService()
    fenced = f"```json\n{json.dumps(GENERATED)}\n```"
    with patch.object(service, "generate", AsyncMock(return_value=fenced)):
        result = await service.generate_json("prompt")

    assert result[0]["title"] == "Milk Rice Pudding"


@pytest.mark.asyncio
async def test_generate_json_raises_on_prose():
    service = LLMService()
    with patch.object(service, "generate", AsyncMock(return_value="Here are some recipes!")):
        with pytest.raises(json.JSONDecodeError):
            await service.generate_json("prompt")


# --- API ---


def stock_pantry(client, headers):
    soon = (datetime.now(UTC) + timedelta(days=1)).isoformat()
    client.post(
        "/api/pantry",
        json={"name": "Milk", "quantity": 1, "unit": "L", "expiration_date": soon},
        headers=headers,
    )
    client.post("/api/pantry", json={"name": "Rice", "quantity": 2, "unit": "kg"}, headers=headers)


def test_generate_recipes(client, db, auth_headers, mock_llm):
    stock_pantry(client, auth_headers)
    mock_llm.generate_json.return_value = GENERATED

    response = client.post(
        "/api/ai/recipes",
        json={"user_prompt": "something sweet", "count": 2},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Generated 2 recipes"
    assert [r["title"] for r in body["data"]] == ["Milk Rice Pudding", "Spinach Omelette"]
    assert all(r["id"] for r in body["data"])

    prompt = mock_llm.generate_json.call_args.kwargs["prompt"]
    assert prompt.index("USE FIRST") < prompt.index("Milk (1 L)") < prompt.index("Other items")
    assert "Rice (2 kg)" in prompt
    assert 'Special request: "something sweet"' in prompt
    assert "Suggest 2 recipes" in prompt

    history = db.query(RecipeHistory).one()
    assert history.prompt == "something sweet"
    assert history.user_id == auth_headers.user_id
    assert history.household_id is None
    assert [r["id"] for r in history.recipes] == [r["id"] for r in body["data"]]

    listed = client.get("/api/recipe-history", headers=auth_headers).json()["data"]
    assert len(listed) == 1


def test_generate_recipes_without_body(client, auth_headers, mock_llm):
    stock_pantry(client, auth_headers)
    mock_llm.generate_json.return_value = GENERATED[:1]

    response = client.post("/api/ai/recipes", headers=auth_headers)
    assert response.status_code == 200
    assert "Suggest 3 recipes" in mock_llm.generate_json.call_args.kwargs["prompt"]


def test_generate_recipes_uses_preferences(client, auth_headers, mock_llm):
    stock_pantry(client, auth_headers)
    client.put(
        "/api/user/preferences",
        json={"allergies": ["shellfish"], "dietary_preferences": ["pescatarian"]},
        headers=auth_headers,
    )
    mock_llm.generate_json.return_value = GENERATED

    client.post("/api/ai/recipes", json={}, headers=auth_headers)

    prompt = mock_llm.generate_json.call_args.kwargs["prompt"]
    assert "shellfish" in prompt
    assert "pescatarian" in prompt


def test_empty_pantry_does_not_call_model(client, db, auth_headers, mock_llm):
    response = client.post("/api/ai/recipes", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["message"] == (
        "Your pantry has no usable items. Add items to get recipe suggestions."
    )
    mock_llm.generate_json.assert_not_called()
    assert db.query(RecipeHistory).count() == 0


def test_only_expired_items_counts_as_empty(client, auth_headers, mock_llm):
    expired = (datetime.now(UTC) - timedelta(days=2)).isoformat()
    client.post(
        "/api/pantry",
        json={"name": "Old Milk", "expiration_date": expired},
        headers=auth_headers,
    )

    response = client.post("/api/ai/recipes", json={}, headers=auth_headers)
    assert response.status_code == 400
    mock_llm.generate_json.assert_not_called()


@pytest.mark.parametrize(
    ("llm_result", "message"),
    [
        (
            json.JSONDecodeError("Expecting value", "Sure!", 0),
            "Failed to parse recipes from AI response",
        ),
        (RuntimeError("connection reset"), "Failed to generate recipes"),
    ],
)
def test_model_failures(client, db, auth_headers, mock_llm, llm_result, message):
    stock_pantry(client, auth_headers)
    mock_llm.generate_json.side_effect = llm_result

    response = client.post("/api/ai/recipes", json={}, headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": message}
    assert db.query(RecipeHistory).count() == 0


def test_malformed_recipes(client, db, auth_headers, mock_llm):
    stock_pantry(client, auth_headers)
    mock_llm.generate_json.return_value = {"title": "Not a list"}

    response = client.post("/api/ai/recipes", json={}, headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["message"] == "Failed to parse recipes from AI response"
    assert db.query(RecipeHistory).count() == 0


def test_generate_recipes_count_limits(client, auth_headers, mock_llm):
    response = client.post("/api/ai/recipes", json={"count": 0}, headers=auth_headers)
    assert response.status_code == 400
    response = client.post("/api/ai/recipes", json={"count": 11}, headers=auth_headers)
    assert response.status_code == 400


def test_generate_content(client, auth_headers, mock_llm):
    mock_llm.generate.return_value = "Salt the pasta water generously."

    response = client.post("/api/ai", json={"prompt": "Pasta tip?"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"text": "Salt the pasta water generously."}
    mock_llm.generate.assert_awaited_once_with("Pasta tip?")


def test_generate_content_requires_prompt(client, auth_headers, mock_llm):
    response = client.post("/api/ai", json={"prompt": "   "}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Prompt is required"
    mock_llm.generate.assert_not_called()


def test_generate_content_model_error(client, auth_headers, mock_llm):
    mock_llm.generate.side_effect = RuntimeError("overloaded")

    response = client.post("/api/ai", json={"prompt": "Hi"}, headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["message"] == "Error generating content"
