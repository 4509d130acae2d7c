"""Tests for saved recipe endpoints."""

import pytest


def recipe_payload(**overrides):
    payload = {
        "title": "Shakshuka",
        "minutes": 30,
        "servings": 2,
        "tags": ["vegetarian", "brunch"],
        "kcal": 320,
        "protein": 18,
        "carbs": 14,
        "fat": 21,
        "ingredients": [
            {"name": "Eggs", "amount": "4"},
            {"name": "Canned tomatoes", "amount": "400 g"},
        ],
        "steps": ["Simmer the tomatoes", "Crack in the eggs", "Cover until set"],
    }
    payload.update(overrides)
    return payload


def save(client, headers, **overrides):
    response = client.post("/api/recipes", json=recipe_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_save_recipe(client, auth_headers):
    response = client.post("/api/recipes", json=recipe_payload(), headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Recipe saved"
    data = body["data"]
    assert data["title"] == "Shakshuka"
    assert data["user_id"] == auth_headers.user_id
    assert data["is_favorite"] is False
    assert data["is_custom"] is False
    assert data["ingredients"][1] == {"name": "Canned tomatoes", "amount": "400 g"}
    assert len(data["steps"]) == 3


def test_save_recipe_requires_ingredients_and_steps(client, auth_headers):
    payload = recipe_payload()
    del payload["ingredients"]
    assert client.post("/api/recipes", json=payload, headers=auth_headers).status_code == 400

    payload = recipe_payload()
    del payload["steps"]
    assert client.post("/api/recipes", json=payload, headers=auth_headers).status_code == 400


@pytest.mark.parametrize("title", ["Shakshuka", "shakshuka", "  SHAKSHUKA "])
def test_duplicate_title_conflicts(client, auth_headers, title):
    save(client, auth_headers)

    response = client.post("/api/recipes", json=recipe_payload(title=title), headers=auth_headers)
    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "message": "You already have a recipe with this title saved",
    }
    assert len(client.get("/api/recipes", headers=auth_headers).json()["data"]) == 1


def test_same_title_for_different_users(client, auth_headers, other_headers):
    save(client, auth_headers)
    save(client, other_headers)


def test_list_recipes_newest_first(client, auth_headers):
    save(client, auth_headers, title="First")
    save(client, auth_headers, title="Second")

    response = client.get("/api/recipes", headers=auth_headers)
    assert [r["title"] for r in response.json()["data"]] == ["Second", "First"]


def test_list_filters(client, auth_headers):
    favorite = save(client, auth_headers, title="Favorite")
    save(client, auth_headers, title="Custom", is_custom=True)
    save(client, auth_headers, title="Plain")
    client.put(f"/api/recipes/{favorite['id']}/favorite", headers=auth_headers)

    favorites = client.get("/api/recipes", params={"favorites": True}, headers=auth_headers)
    assert [r["title"] for r in favorites.json()["data"]] == ["Favorite"]

    custom = client.get("/api/recipes", params={"custom": True}, headers=auth_headers)
    assert [r["title"] for r in custom.json()["data"]] == ["Custom"]


def test_toggle_favorite(client, auth_headers):
    recipe = save(client, auth_headers)

    response = client.put(f"/api/recipes/{recipe['id']}/favorite", headers=auth_headers)
    assert response.json()["data"]["is_favorite"] is True

    response = client.put(f"/api/recipes/{recipe['id']}/favorite", headers=auth_headers)
    assert response.json()["data"]["is_favorite"] is False


def test_update_recipe(client, auth_headers):
    recipe = save(client, auth_headers)

    response = client.put(
        f"/api/recipes/{recipe['id']}",
        json={"servings": 4, "notes": "Add feta"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["servings"] == 4
    assert data["notes"] == "Add feta"
    assert data["title"] == "Shakshuka"
    assert len(data["ingredients"]) == 2


def test_update_to_own_title_is_allowed(client, auth_headers):
    recipe = save(client, auth_headers)

    response = client.put(
        f"/api/recipes/{recipe['id']}", json={"title": "SHAKSHUKA"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "SHAKSHUKA"


def test_update_to_taken_title_conflicts(client, auth_headers):
    save(client, auth_headers, title="Shakshuka")
    other = save(client, auth_headers, title="Frittata")

    response = client.put(
        f"/api/recipes/{other['id']}", json={"title": "shakshuka"}, headers=auth_headers
    )
    assert response.status_code == 409


def test_get_and_delete_recipe(client, auth_headers):
    recipe = save(client, auth_headers)

    assert client.get(f"/api/recipes/{recipe['id']}", headers=auth_headers).status_code == 200

    response = client.delete(f"/api/recipes/{recipe['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Recipe deleted"

    response = client.get(f"/api/recipes/{recipe['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Recipe not found"


def test_recipes_are_private(client, auth_headers, other_headers):
    recipe = save(client, auth_headers)

    assert client.get("/api/recipes", headers=other_headers).json()["data"] == []
    assert client.get(f"/api/recipes/{recipe['id']}", headers=other_headers).status_code == 404
    assert (
        client.put(f"/api/recipes/{recipe['id']}/favorite", headers=other_headers).status_code
        == 404
    )
