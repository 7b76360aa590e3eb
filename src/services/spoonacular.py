"""Client for the Spoonacular recipe search API."""

import logging
from typing import Any

import httpx

from src.config import get_settings
from src.exceptions import ExternalServiceError, NotFoundError

logger = logging.getLogger(__name__)


def slice_overview(recipe: dict) -> dict[str, Any]:
    """Reduce a Spoonacular recipe to the fields shown in result lists."""
    return {
        "id": recipe["id"],
        "title": recipe.get("title"),
        "image": recipe.get("image"),
        "ready_in_minutes": recipe.get("readyInMinutes"),
        "popularity": recipe.get("aggregateLikes") or 0,
        "vegan": bool(recipe.get("vegan")),
        "vegetarian": bool(recipe.get("vegetarian")),
        "gluten_free": bool(recipe.get("glutenFree")),
    }


def slice_details(recipe: dict) -> dict[str, Any]:
    """Full recipe page: overview plus summary, servings, ingredients and steps."""
    details = slice_overview(recipe)
    details.update(
        {
            "summary": recipe.get("summary"),
            "servings": recipe.get("servings"),
            "instructions": recipe.get("instructions"),
            "ingredients": [
                {
                    "name": ing.get("name"),
                    "amount": ing.get("amount"),
                    "unit": ing.get("unit"),
                }
                for ing in recipe.get("extendedIngredients") or []
            ],
            "steps": [
                {"step_number": number, "description": description}
                for number, description in slice_instructions(
                    recipe.get("analyzedInstructions") or []
                )
            ],
        }
    )
    return details


def slice_instructions(instructions: list) -> list[tuple[int, str]]:
    """Extract (number, description) pairs from the first analyzed instruction block.

    Steps without text are skipped and the rest renumbered 1..N in API order.
    """
    if not instructions:
        return []
    steps = sorted(instructions[0].get("steps") or [], key=lambda step: int(step["number"]))
    texts = [step["step"].strip() for step in steps if (step.get("step") or "").strip()]
    return list(enumerate(texts, start=1))


class SpoonacularService:
    """Async wrapper around the Spoonacular recipes endpoints."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.spoonacular_api_key
        self.base_url = (base_url or settings.spoonacular_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.spoonacular_timeout_seconds

    @property
    def is_configured(self) -> bool:
        """Check if an API key is available."""
        return bool(self.api_key)

    async def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """GET an endpoint relative to the recipes base URL and return parsed JSON."""
        if not self.is_configured:
            raise ExternalServiceError("Recipe search is not configured", http_status=503)

        query = {key: value for key, value in (params or {}).items() if value not in (None, "")}
        query["apiKey"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(f"{self.base_url}{endpoint}", params=query)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError("Recipe not found") from e
            logger.error(f"Spoonacular returned {e.response.status_code} for {endpoint}")
            raise ExternalServiceError() from e
        except httpx.HTTPError as e:
            logger.error(f"Spoonacular request to {endpoint} failed: {e}")
            raise ExternalServiceError() from e

    async def random_recipes(self, number: int = 3) -> list[dict[str, Any]]:
        data = await self._get("/random", {"number": number})
        return [slice_overview(r) for r in data.get("recipes", [])]

    async def search(
        self,
        query: str,
        cuisine: str | None = None,
        diet: str | None = None,
        intolerance: str | None = None,
        limit: int = 5,
    ) -> list[dict[str, Any]]:
        """Search recipes with optional filters."""
        data = await self._get(
            "/complexSearch",
            {
                "query": query,
                "cuisine": cuisine,
                "diet": diet,
                "intolerances": intolerance,
                "number": limit,
                "addRecipeInformation": "true",
            },
        )
        return [slice_overview(r) for r in data.get("results", [])]

    async def get_recipe(self, recipe_id: int) -> dict[str, Any]:
        data = await self._get(f"/{recipe_id}/information", {"includeNutrition": "false"})
        return slice_details(data)

    async def get_popularity(self, recipe_id: int) -> int:
        data = await self._get(f"/{recipe_id}/information", {"includeNutrition": "false"})
        return data.get("aggregateLikes") or 0

    async def fetch_steps(self, recipe_id: int) -> list[tuple[int, str]]:
        """Ordered (number, description) preparation steps of an external recipe."""
        data = await self._get(f"/{recipe_id}/analyzedInstructions")
        return slice_instructions(data)
