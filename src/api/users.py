"""User activity API endpoints: favorites, recently viewed, search history and meal plan."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_activity_service,
    get_current_user,
    get_meal_plan_service,
    get_recipe_ref,
)
from src.models.recipe_ref import RecipeRef
from src.models.user import User
from src.schemas.activity import (
    FavoriteResponse,
    MealPlanCountResponse,
    MealPlanEntryResponse,
    RecipeViewResponse,
    SearchHistoryResponse,
)
from src.services.activity_service import ActivityService
from src.services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


# --- Favorites ---


@router.get("/favorites", response_model=list[FavoriteResponse])
async def list_favorites(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ActivityService, Depends(get_activity_service)],
):
    """List the current user's favorite recipes."""
    return service.list_favorites(current_user.id)


@router.post(
    "/favorites/{source}/{recipe_id}",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_favorite(
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ActivityService, Depends(get_activity_service)],
):
    """Add a recipe to favorites (no-op if already there)."""
    return service.add_favorite(current_user.id, ref)


@router.delete("/favorites/{source}/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ActivityService, Depends(get_activity_service)],
):
    service.remove_favorite(current_user.id, ref)


# --- Recently viewed ---


@router.get("/views", response_model=list[RecipeViewResponse])
async def list_recent_views(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ActivityService, Depends(get_activity_service)],
):
    """Recently viewed recipes, newest first."""
    return service.list_recent_views(current_user.id)


@router.post(
    "/views/{source}/{recipe_id}",
    response_model=RecipeViewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_view(
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ActivityService, Depends(get_activity_service)],
):
    """Record that the user opened a recipe."""
    return service.record_view(current_user.id, ref)


# --- Search history ---


@router.get("/search-history", response_model=SearchHistoryResponse | None)
async def get_search_history(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ActivityService, Depends(get_activity_service)],
):
    """The last search of the current user, or null."""
    return service.get_last_search(current_user.id)


@router.delete("/search-history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_search_history(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ActivityService, Depends(get_activity_service)],
):
    service.clear_search_history(current_user.id)


# --- Meal plan (static routes before /meal-plan/{entry_id}) ---


@router.get("/meal-plan", response_model=list[MealPlanEntryResponse])
async def list_meal_plan(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Meal plan entries in order."""
    return service.list_entries(current_user.id)


@router.get("/meal-plan/count", response_model=MealPlanCountResponse)
async def count_meal_plan(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    return MealPlanCountResponse(count=service.count(current_user.id))


@router.delete("/meal-plan", status_code=status.HTTP_204_NO_CONTENT)
async def clear_meal_plan(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Remove every recipe from the meal plan."""
    service.clear(current_user.id)


@router.post(
    "/meal-plan/{source}/{recipe_id}",
    response_model=MealPlanEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_to_meal_plan(
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Append a recipe to the end of the meal plan."""
    return service.add(current_user.id, ref)


@router.delete("/meal-plan/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_meal_plan(
    entry_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Remove one entry; later entries move up."""
    service.remove(current_user.id, entry_id)
