"""User activity API tests: favorites, recently viewed, search history, meal plan, likes."""

from unittest.mock import AsyncMock, patch

from src.services.spoonacular import SpoonacularService


def create_recipe(client, headers, title="Salad"):
    response = client.post(
        "/api/v1/recipes", headers=headers, json={"title": title, "steps": ["Chop", "Toss"]}
    )
    assert response.status_code == 201, response.text
    return response.json()


# --- Favorites ---


def test_add_and_list_favorites(client, auth_headers):
    recipe = create_recipe(client, auth_headers)

    response = client.post(f"/api/v1/users/favorites/personal/{recipe['id']}", headers=auth_headers)
    assert response.status_code == 201
    response = client.post("/api/v1/users/favorites/external/716429", headers=auth_headers)
    assert response.status_code == 201

    response = client.get("/api/v1/users/favorites", headers=auth_headers)
    assert response.status_code == 200
    refs = {(f["recipe_source"], f["recipe_id"]) for f in response.json()}
    assert refs == {("personal", recipe["id"]), ("external", 716429)}


def test_add_favorite_twice_keeps_one(client, auth_headers):
    first = client.post("/api/v1/users/favorites/external/42", headers=auth_headers)
    second = client.post("/api/v1/users/favorites/external/42", headers=auth_headers)

    assert first.json()["id"] == second.json()["id"]
    assert len(client.get("/api/v1/users/favorites", headers=auth_headers).json()) == 1


def test_remove_favorite(client, auth_headers):
    client.post("/api/v1/users/favorites/external/42", headers=auth_headers)

    response = client.delete("/api/v1/users/favorites/external/42", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/v1/users/favorites", headers=auth_headers).json() == []

    response = client.delete("/api/v1/users/favorites/external/42", headers=auth_headers)
    assert response.status_code == 404


def test_cannot_favorite_someone_elses_recipe(client, auth_headers, other_auth_headers):
    recipe = create_recipe(client, auth_headers)

    response = client.post(
        f"/api/v1/users/favorites/personal/{recipe['id']}", headers=other_auth_headers
    )
    assert response.status_code == 403


# --- Recently viewed ---


def test_recent_views_keep_latest_three(client, auth_headers):
    for recipe_id in (1, 2, 3, 4):
        response = client.post(f"/api/v1/users/views/external/{recipe_id}", headers=auth_headers)
        assert response.status_code == 201

    response = client.get("/api/v1/users/views", headers=auth_headers)
    assert [v["recipe_id"] for v in response.json()] == [4, 3, 2]


def test_repeated_view_moves_to_front(client, auth_headers):
    for recipe_id in (1, 2, 1):
        client.post(f"/api/v1/users/views/external/{recipe_id}", headers=auth_headers)

    response = client.get("/api/v1/users/views", headers=auth_headers)
    assert [v["recipe_id"] for v in response.json()] == [1, 2]


def test_viewing_personal_recipe_increases_popularity(client, auth_headers):
    recipe = create_recipe(client, auth_headers)

    client.post(f"/api/v1/users/views/personal/{recipe['id']}", headers=auth_headers)
    client.post(f"/api/v1/users/views/personal/{recipe['id']}", headers=auth_headers)

    response = client.get(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers)
    assert response.json()["popularity"] == 2


def test_views_are_per_user(client, auth_headers, other_auth_headers):
    client.post("/api/v1/users/views/external/1", headers=auth_headers)

    response = client.get("/api/v1/users/views", headers=other_auth_headers)
    assert response.json() == []


# --- Search history ---


def test_search_history_keeps_only_latest(client, auth_headers, db):
    from src.services.activity_service import ActivityService

    service = ActivityService(db)
    service.save_search(auth_headers.user_id, "pasta", cuisine="Italian")
    service.save_search(auth_headers.user_id, "hummus", diet="vegan", limit=10)

    response = client.get("/api/v1/users/search-history", headers=auth_headers)
    data = response.json()
    assert data["search_query"] == "hummus"
    assert data["diet_filter"] == "vegan"
    assert data["cuisine_filter"] is None
    assert data["results_limit"] == 10


def test_clear_search_history(client, auth_headers, db):
    from src.services.activity_service import ActivityService

    ActivityService(db).save_search(auth_headers.user_id, "pasta")

    response = client.delete("/api/v1/users/search-history", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/v1/users/search-history", headers=auth_headers).json() is None


# --- Meal plan ---


def test_meal_plan_order(client, auth_headers):
    recipe = create_recipe(client, auth_headers)
    client.post("/api/v1/users/meal-plan/external/10", headers=auth_headers)
    client.post(f"/api/v1/users/meal-plan/personal/{recipe['id']}", headers=auth_headers)
    response = client.post("/api/v1/users/meal-plan/external/20", headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["order_in_meal"] == 3

    response = client.get("/api/v1/users/meal-plan", headers=auth_headers)
    assert [(e["order_in_meal"], e["recipe_source"]) for e in response.json()] == [
        (1, "external"),
        (2, "personal"),
        (3, "external"),
    ]
    assert client.get("/api/v1/users/meal-plan/count", headers=auth_headers).json() == {"count": 3}


def test_remove_from_meal_plan_shifts_later_entries(client, auth_headers):
    entries = [
        client.post(f"/api/v1/users/meal-plan/external/{rid}", headers=auth_headers).json()
        for rid in (10, 20, 30)
    ]

    response = client.delete(f"/api/v1/users/meal-plan/{entries[0]['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = client.get("/api/v1/users/meal-plan", headers=auth_headers)
    assert [(e["order_in_meal"], e["recipe_id"]) for e in response.json()] == [(1, 20), (2, 30)]


def test_remove_someone_elses_meal_plan_entry(client, auth_headers, other_auth_headers):
    entry = client.post("/api/v1/users/meal-plan/external/10", headers=auth_headers).json()

    response = client.delete(f"/api/v1/users/meal-plan/{entry['id']}", headers=other_auth_headers)
    assert response.status_code == 404


def test_clear_meal_plan(client, auth_headers):
    client.post("/api/v1/users/meal-plan/external/10", headers=auth_headers)
    client.post("/api/v1/users/meal-plan/external/20", headers=auth_headers)

    response = client.delete("/api/v1/users/meal-plan", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/v1/users/meal-plan/count", headers=auth_headers).json() == {"count": 0}


# --- Likes ---


def test_like_personal_recipe_starts_from_popularity(client, auth_headers):
    recipe = create_recipe(client, auth_headers)
    client.post(f"/api/v1/users/views/personal/{recipe['id']}", headers=auth_headers)

    response = client.post(f"/api/v1/likes/personal/{recipe['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"recipe_source": "personal", "recipe_id": recipe["id"], "likes": 2}

    response = client.get(f"/api/v1/recipes/{recipe['id']}", headers=auth_headers)
    assert response.json()["popularity"] == 2


def test_like_external_recipe_seeds_from_api(client, auth_headers):
    with patch.object(
        SpoonacularService, "_get", new=AsyncMock(return_value={"aggregateLikes": 120})
    ) as mock_get:
        first = client.post("/api/v1/likes/external/716429", headers=auth_headers)
        second = client.post("/api/v1/likes/external/716429", headers=auth_headers)

    assert first.json()["likes"] == 121
    assert second.json()["likes"] == 122
    mock_get.assert_called_once()


def test_like_family_recipe_starts_from_zero(client, auth_headers):
    family = client.post(
        "/api/v1/family-recipes",
        headers=auth_headers,
        json={"title": "Cholent", "owner_name": "Dad", "steps": ["Cook overnight"]},
    ).json()

    response = client.post(f"/api/v1/likes/family/{family['id']}", headers=auth_headers)
    assert response.json()["likes"] == 1
