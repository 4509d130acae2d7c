"""Tests for recipe history endpoints."""

from src.models.recipe import RecipeHistory


def add_history(db, user_id, household_id=None, prompt=None, count=1):
    entries = [
        RecipeHistory(
            user_id=user_id,
            household_id=household_id,
            created_by_user_id=user_id,
            created_by_name="Test User",
            prompt=prompt,
            recipes=[{"id": f"r{i}", "title": f"Recipe {i}"}],
        )
        for i in range(count)
    ]
    db.add_all(entries)
    db.commit()
    return entries


def test_list_history(client, db, auth_headers):
    add_history(db, auth_headers.user_id, prompt="something quick")

    response = client.get("/api/recipe-history", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 1
    assert data[0]["prompt"] == "something quick"
    assert data[0]["recipes"][0]["title"] == "Recipe 0"
    assert data[0]["created_by_name"] == "Test User"


def test_list_history_is_capped_newest_first(client, db, auth_headers):
    entries = add_history(db, auth_headers.user_id, count=55)

    data = client.get("/api/recipe-history", headers=auth_headers).json()["data"]
    assert len(data) == 50
    assert data[0]["id"] == entries[-1].id
    assert data[-1]["id"] == entries[5].id


def test_history_excludes_other_scopes(client, db, auth_headers, other_headers):
    add_history(db, other_headers.user_id)

    assert client.get("/api/recipe-history", headers=auth_headers).json()["data"] == []


def test_delete_history_item(client, db, auth_headers):
    entry, kept = add_history(db, auth_headers.user_id, count=2)

    response = client.delete(f"/api/recipe-history/{entry.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "History item deleted"

    data = client.get("/api/recipe-history", headers=auth_headers).json()["data"]
    assert [e["id"] for e in data] == [kept.id]


def test_delete_history_item_of_other_user(client, db, auth_headers, other_headers):
    (entry,) = add_history(db, other_headers.user_id)

    response = client.delete(f"/api/recipe-history/{entry.id}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "History item not found"


def test_clear_history(client, db, auth_headers, other_headers):
    add_history(db, auth_headers.user_id, count=3)
    add_history(db, other_headers.user_id)

    response = client.delete("/api/recipe-history", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "History cleared"
    assert client.get("/api/recipe-history", headers=auth_headers).json()["data"] == []
    assert len(client.get("/api/recipe-history", headers=other_headers).json()["data"]) == 1
