"""External recipe search tests (Spoonacular client and routes)."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.exceptions import ExternalServiceError, NotFoundError
from src.services.spoonacular import SpoonacularService, slice_details, slice_instructions

RECIPE = {
    "id": 716429,
    "title": "Pasta with Garlic",
    "image": "https://img.spoonacular.com/716429.jpg",
    "readyInMinutes": 45,
    "aggregateLikes": 209,
    "vegan": False,
    "vegetarian": True,
    "glutenFree": False,
    "servings": 2,
    "summary": "A quick pasta.",
    "instructions": "Boil. Toss.",
    "extendedIngredients": [{"name": "garlic", "amount": 2.0, "unit": "cloves"}],
    "analyzedInstructions": [
        {"steps": [{"number": 2, "step": "Toss."}, {"number": 1, "step": "Boil."}]}
    ],
}


class TestSlicing:
    """Tests for trimming API payloads."""

    def test_details(self):
        details = slice_details(RECIPE)
        assert details["ready_in_minutes"] == 45
        assert details["popularity"] == 209
        assert details["vegetarian"] is True
        assert details["gluten_free"] is False
        assert details["ingredients"] == [{"name": "garlic", "amount": 2.0, "unit": "cloves"}]
        assert details["steps"] == [
            {"step_number": 1, "description": "Boil."},
            {"step_number": 2, "description": "Toss."},
        ]

    def test_instructions_empty(self):
        assert slice_instructions([]) == []

    def test_instructions_skip_blank_steps_and_renumber(self):
        blocks = [
            {
                "steps": [
                    {"number": 3, "step": "Serve."},
                    {"number": 1, "step": "Boil."},
                    {"number": 2, "step": "  "},
                ]
            }
        ]
        assert slice_instructions(blocks) == [(1, "Boil."), (2, "Serve.")]


class TestSpoonacularService:
    """Tests for the HTTP client."""

    @pytest.mark.asyncio
    async def test_not_configured(self):
        service = SpoonacularService(api_key="")
        with pytest.raises(ExternalServiceError) as exc_info:
            await service.random_recipes()
        assert exc_info.value.http_status == 503

    @pytest.mark.asyncio
    async def test_get_sends_api_key_and_drops_empty_params(self):
        service = SpoonacularService(api_key="key123", base_url="https://example.test/recipes")
        response = MagicMock()
        response.json.return_value = {"results": [RECIPE]}
        client = AsyncMock()
        client.get.return_value = response

        with patch("src.services.spoonacular.httpx.AsyncClient") as mock_client_cls:
            mock_client_cls.return_value.__aenter__.return_value = client
            results = await service.search("pasta", cuisine="Italian", diet=None)

        assert results[0]["title"] == "Pasta with Garlic"
        url = client.get.call_args.args[0]
        params = client.get.call_args.kwargs["params"]
        assert url == "https://example.test/recipes/complexSearch"
        assert params["apiKey"] == "key123"
        assert params["cuisine"] == "Italian"
        assert "diet" not in params
        assert params["number"] == 5

    @pytest.mark.asyncio
    async def test_404_becomes_not_found(self):
        service = SpoonacularService(api_key="key123")
        request = httpx.Request("GET", "https://example.test")
        error = httpx.HTTPStatusError(
            "missing", request=request, response=httpx.Response(404, request=request)
        )
        response = MagicMock()
        response.raise_for_status.side_effect = error
        client = AsyncMock()
        client.get.return_value = response

        with patch("src.services.spoonacular.httpx.AsyncClient") as mock_client_cls:
            mock_client_cls.return_value.__aenter__.return_value = client
            with pytest.raises(NotFoundError):
                await service.get_recipe(1)

    @pytest.mark.asyncio
    async def test_network_error_becomes_external_error(self):
        service = SpoonacularService(api_key="key123")
        client = AsyncMock()
        client.get.side_effect = httpx.ConnectError("down")

        with patch("src.services.spoonacular.httpx.AsyncClient") as mock_client_cls:
            mock_client_cls.return_value.__aenter__.return_value = client
            with pytest.raises(ExternalServiceError) as exc_info:
                await service.fetch_steps(1)
        assert exc_info.value.http_status == 502


# --- Routes ---


def test_random_recipes(client, auth_headers):
    with patch.object(
        SpoonacularService, "_get", new=AsyncMock(return_value={"recipes": [RECIPE] * 3})
    ) as mock_get:
        response = client.get("/api/v1/external/random", headers=auth_headers)

    assert response.status_code == 200
    assert len(response.json()) == 3
    mock_get.assert_called_once_with("/random", {"number": 3})


def test_search_saves_history(client, auth_headers):
    with patch.object(
        SpoonacularService, "_get", new=AsyncMock(return_value={"results": [RECIPE]})
    ):
        response = client.get(
            "/api/v1/external/search",
            headers=auth_headers,
            params={"q": "pasta", "cuisine": "Italian", "limit": 1},
        )

    assert response.status_code == 200
    assert response.json()[0]["id"] == 716429

    history = client.get("/api/v1/users/search-history", headers=auth_headers).json()
    assert history["search_query"] == "pasta"
    assert history["cuisine_filter"] == "Italian"
    assert history["results_limit"] == 1


def test_search_requires_query(client, auth_headers):
    response = client.get("/api/v1/external/search", headers=auth_headers)
    assert response.status_code == 422


def test_recipe_details_records_view(client, auth_headers):
    with patch.object(SpoonacularService, "_get", new=AsyncMock(return_value=RECIPE)):
        response = client.get("/api/v1/external/716429", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["title"] == "Pasta with Garlic"
    assert len(response.json()["steps"]) == 2

    views = client.get("/api/v1/users/views", headers=auth_headers).json()
    assert [(v["recipe_source"], v["recipe_id"]) for v in views] == [("external", 716429)]


def test_recipe_details_not_found(client, auth_headers):
    with patch.object(
        SpoonacularService, "_get", new=AsyncMock(side_effect=NotFoundError("Recipe not found"))
    ):
        response = client.get("/api/v1/external/1", headers=auth_headers)

    assert response.status_code == 404
    assert client.get("/api/v1/users/views", headers=auth_headers).json() == []


def test_instructions(client, auth_headers):
    with patch.object(
        SpoonacularService, "_get", new=AsyncMock(return_value=RECIPE["analyzedInstructions"])
    ):
        response = client.get("/api/v1/external/716429/instructions", headers=auth_headers)

    assert response.json() == [
        {"step_number": 1, "description": "Boil."},
        {"step_number": 2, "description": "Toss."},
    ]


def test_external_api_failure_maps_to_502(client, auth_headers):
    with patch.object(
        SpoonacularService, "_get", new=AsyncMock(side_effect=ExternalServiceError())
    ):
        response = client.get("/api/v1/external/random", headers=auth_headers)

    assert response.status_code == 502
    assert "detail" in response.json()
