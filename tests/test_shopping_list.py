"""Tests for shopping list endpoints."""

from src.models.shopping_list import ShoppingListItem


def add_item(client, headers, **overrides):
    payload = {"name": "Bread", "quantity": 1}
    payload.update(overrides)
    response = client.post("/api/shopping-list", json=payload, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def add_pantry_item(client, headers, **overrides):
    payload = {"name": "Milk", "quantity": 1, "unit": "L", "category": "Dairy"}
    payload.update(overrides)
    response = client.post("/api/pantry", json=payload, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def list_items(client, headers):
    response = client.get("/api/shopping-list", headers=headers)
    assert response.status_code == 200
    return response.json()["data"]


def test_add_shopping_item(client, auth_headers):
    response = client.post(
        "/api/shopping-list",
        json={"name": " Coffee ", "quantity": 2, "unit": "bags", "priority": "high"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Item added to shopping list"
    assert body["data"]["name"] == "Coffee"
    assert body["data"]["priority"] == "high"
    assert body["data"]["checked"] is False
    assert body["data"]["created_by_name"] == "Test User"


def test_add_shopping_item_validation(client, auth_headers):
    assert (
        client.post("/api/shopping-list", json={"quantity": 1}, headers=auth_headers).status_code
        == 400
    )
    assert (
        client.post(
            "/api/shopping-list", json={"name": "Tea", "quantity": -2}, headers=auth_headers
        ).status_code
        == 400
    )
    assert (
        client.post(
            "/api/shopping-list", json={"name": "Tea", "priority": "urgent"}, headers=auth_headers
        ).status_code
        == 400
    )


def test_list_order_unchecked_then_priority_then_newest(client, auth_headers):
    low = add_item(client, auth_headers, name="Gum", priority="low")
    first_normal = add_item(client, auth_headers, name="Bread")
    second_normal = add_item(client, auth_headers, name="Butter")
    high = add_item(client, auth_headers, name="Coffee", priority="high")
    checked_high = add_item(client, auth_headers, name="Tea", priority="high")
    client.put(f"/api/shopping-list/{checked_high['id']}/toggle", headers=auth_headers)

    names = [i["name"] for i in list_items(client, auth_headers)]
    assert names == [
        high["name"],
        second_normal["name"],
        first_normal["name"],
        low["name"],
        checked_high["name"],
    ]


def test_toggle_item(client, auth_headers):
    item = add_item(client, auth_headers)

    response = client.put(f"/api/shopping-list/{item['id']}/toggle", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["checked"] is True
    assert response.json()["message"] == "Item checked"

    response = client.patch(f"/api/shopping-list/{item['id']}/toggle", headers=auth_headers)
    assert response.json()["data"]["checked"] is False
    assert response.json()["message"] == "Item unchecked"


def test_update_item(client, auth_headers):
    item = add_item(client, auth_headers, unit="loaf")

    response = client.put(
        f"/api/shopping-list/{item['id']}",
        json={"quantity": 3, "priority": "high"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["quantity"] == 3
    assert data["priority"] == "high"
    assert data["unit"] == "loaf"
    assert data["name"] == "Bread"


def test_delete_item(client, auth_headers):
    item = add_item(client, auth_headers)

    response = client.delete(f"/api/shopping-list/{item['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Item removed from shopping list"
    assert list_items(client, auth_headers) == []

    response = client.delete(f"/api/shopping-list/{item['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_clear_checked(client, auth_headers, other_headers):
    kept = add_item(client, auth_headers, name="Bread")
    for name in ["Eggs", "Jam"]:
        item = add_item(client, auth_headers, name=name)
        client.put(f"/api/shopping-list/{item['id']}/toggle", headers=auth_headers)
    # Another user's checked item is untouched
    theirs = add_item(client, other_headers, name="Soda")
    client.put(f"/api/shopping-list/{theirs['id']}/toggle", headers=other_headers)

    response = client.delete("/api/shopping-list/clear-checked", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Cleared 2 checked items"
    assert [i["id"] for i in list_items(client, auth_headers)] == [kept["id"]]
    assert len(list_items(client, other_headers)) == 1

    response = client.delete("/api/shopping-list/checked", headers=auth_headers)
    assert response.json()["message"] == "Cleared 0 checked items"


def test_generate_from_low_stock(client, auth_headers):
    milk = add_pantry_item(client, auth_headers, name="Milk", quantity=1)
    add_pantry_item(client, auth_headers, name="Eggs", quantity=2, unit=None)
    add_pantry_item(client, auth_headers, name="Rice", quantity=10, unit="kg")

    response = client.post("/api/shopping-list/generate", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Added 2 items from low stock"
    by_name = {i["name"]: i for i in body["data"]}
    assert set(by_name) == {"Eggs", "Milk"}
    assert by_name["Milk"]["pantry_item_id"] == milk["id"]
    assert by_name["Milk"]["quantity"] == 1
    assert by_name["Milk"]["unit"] == "L"
    assert by_name["Milk"]["category"] == "Dairy"


def test_generate_from_low_stock_is_idempotent(client, auth_headers, db):
    add_pantry_item(client, auth_headers, name="Milk", quantity=1)

    first = client.post("/api/shopping-list/generate-from-low-stock", headers=auth_headers)
    assert len(first.json()["data"]) == 1

    second = client.post("/api/shopping-list/generate-from-low-stock", headers=auth_headers)
    assert second.status_code == 200
    assert second.json()["data"] == []
    assert second.json()["message"] == "Added 0 items from low stock"
    assert db.query(ShoppingListItem).count() == 1


def test_generate_with_nothing_low(client, auth_headers):
    add_pantry_item(client, auth_headers, name="Rice", quantity=10)

    response = client.post("/api/shopping-list/generate", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"] == []
    assert response.json()["message"] == "No low stock items found"


def test_move_to_pantry_restocks_linked_item(client, auth_headers):
    milk = add_pantry_item(client, auth_headers, name="Milk", quantity=1)
    generated = client.post("/api/shopping-list/generate", headers=auth_headers).json()["data"]
    shopping_item = generated[0]
    client.put(
        f"/api/shopping-list/{shopping_item['id']}", json={"quantity": 4}, headers=auth_headers
    )

    response = client.post(
        f"/api/shopping-list/{shopping_item['id']}/to-pantry", headers=auth_headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Added 4 to existing pantry item"
    assert body["data"]["id"] == milk["id"]
    assert body["data"]["quantity"] == 5

    assert list_items(client, auth_headers) == []
    pantry = client.get("/api/pantry", headers=auth_headers).json()["data"]
    assert len(pantry) == 1


def test_move_to_pantry_creates_new_item(client, auth_headers):
    item = add_item(client, auth_headers, name="Apples", quantity=6, category="Produce")

    response = client.post(
        f"/api/shopping-list/{item['id']}/add-to-pantry", headers=auth_headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Item added to pantry"
    assert body["data"]["name"] == "Apples"
    assert body["data"]["quantity"] == 6
    assert body["data"]["category"] == "Produce"
    assert list_items(client, auth_headers) == []


def test_move_to_pantry_drops_non_pantry_category(client, auth_headers):
    item = add_item(client, auth_headers, name="Basil", category="Meal Plan")

    response = client.post(f"/api/shopping-list/{item['id']}/to-pantry", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["category"] is None


def test_move_to_pantry_when_linked_item_was_deleted(client, auth_headers):
    milk = add_pantry_item(client, auth_headers, name="Milk", quantity=1)
    shopping_item = client.post("/api/shopping-list/generate", headers=auth_headers).json()[
        "data"
    ][0]
    client.delete(f"/api/pantry/{milk['id']}", headers=auth_headers)

    response = client.post(
        f"/api/shopping-list/{shopping_item['id']}/to-pantry", headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Item added to pantry"
    assert response.json()["data"]["id"] != milk["id"]


def test_shopping_items_are_private(client, auth_headers, other_headers):
    item = add_item(client, auth_headers)

    assert list_items(client, other_headers) == []
    assert (
        client.put(f"/api/shopping-list/{item['id']}/toggle", headers=other_headers).status_code
        == 404
    )
    assert (
        client.post(f"/api/shopping-list/{item['id']}/to-pantry", headers=other_headers).status_code
        == 404
    )
