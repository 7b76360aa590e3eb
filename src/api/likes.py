"""Recipe likes API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    get_activity_service,
    get_current_user,
    get_recipe_ref,
    get_spoonacular_service,
)
from src.models.recipe_ref import RecipeRef
from src.models.user import User
from src.schemas.activity import LikeResponse
from src.services.activity_service import ActivityService
from src.services.spoonacular import SpoonacularService

router = APIRouter(prefix="/api/v1/likes", tags=["likes"])


@router.post("/{source}/{recipe_id}", response_model=LikeResponse)
async def like_recipe(
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ActivityService, Depends(get_activity_service)],
    spoonacular: Annotated[SpoonacularService, Depends(get_spoonacular_service)],
):
    """Like a recipe and return its new total."""
    likes = await service.like(current_user.id, ref, spoonacular)
    return LikeResponse(recipe_source=ref.source.value, recipe_id=ref.recipe_id, likes=likes)
