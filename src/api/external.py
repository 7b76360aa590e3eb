"""External recipe search API endpoints (Spoonacular pass-through)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_activity_service, get_current_user, get_spoonacular_service
from src.models.recipe_ref import RecipeRef
from src.models.user import User
from src.schemas.external import ExternalRecipeDetails, ExternalRecipeOverview, InstructionStep
from src.services.activity_service import ActivityService
from src.services.spoonacular import SpoonacularService

router = APIRouter(prefix="/api/v1/external", tags=["external"])


# --- Static routes first (before /{recipe_id}) ---


@router.get("/random", response_model=list[ExternalRecipeOverview])
async def random_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    spoonacular: Annotated[SpoonacularService, Depends(get_spoonacular_service)],
):
    """Three random recipes for the home page."""
    return await spoonacular.random_recipes(number=3)


@router.get("/search", response_model=list[ExternalRecipeOverview])
async def search_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    spoonacular: Annotated[SpoonacularService, Depends(get_spoonacular_service)],
    activity: Annotated[ActivityService, Depends(get_activity_service)],
    q: Annotated[str, Query(min_length=1, max_length=255)],
    cuisine: str | None = None,
    diet: str | None = None,
    intolerance: str | None = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 5,
):
    """Search recipes and remember the search as the user's last one."""
    results = await spoonacular.search(
        q, cuisine=cuisine, diet=diet, intolerance=intolerance, limit=limit
    )
    activity.save_search(
        current_user.id, q, cuisine=cuisine, diet=diet, intolerance=intolerance, limit=limit
    )
    return results


# --- Dynamic routes ---


@router.get("/{recipe_id}", response_model=ExternalRecipeDetails)
async def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    spoonacular: Annotated[SpoonacularService, Depends(get_spoonacular_service)],
    activity: Annotated[ActivityService, Depends(get_activity_service)],
):
    """Full recipe details. Opening a recipe records a view."""
    details = await spoonacular.get_recipe(recipe_id)
    activity.record_view(current_user.id, RecipeRef.external(recipe_id))
    return details


@router.get("/{recipe_id}/instructions", response_model=list[InstructionStep])
async def get_instructions(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    spoonacular: Annotated[SpoonacularService, Depends(get_spoonacular_service)],
):
    steps = await spoonacular.fetch_steps(recipe_id)
    return [InstructionStep(step_number=number, description=text) for number, text in steps]
