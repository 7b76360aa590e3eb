"""Preparation step and progress API endpoints.

Recipes are addressed as /{source}/{recipe_id} with source one of
personal, family or external. Steps themselves are addressed by id.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_recipe_ref, get_step_coordinator
from src.models.recipe_ref import RecipeRef
from src.models.user import User
from src.schemas.step import (
    RecipeStepsResponse,
    StepCreate,
    StepProgressResponse,
    StepResponse,
    StepUpdate,
    StepWithProgressResponse,
)
from src.services.step_coordinator import StepCoordinator

router = APIRouter(prefix="/api/v1/steps", tags=["steps"])


@router.get("/{source}/{recipe_id}", response_model=RecipeStepsResponse)
async def get_steps(
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    coordinator: Annotated[StepCoordinator, Depends(get_step_coordinator)],
):
    """Get a recipe's steps in order with the current user's progress."""
    steps = await coordinator.get_steps_with_progress(ref, current_user.id)
    return RecipeStepsResponse(
        recipe_source=ref.source.value,
        recipe_id=ref.recipe_id,
        total_steps=len(steps),
        completed_steps=sum(1 for step in steps if step.is_completed),
        steps=[StepWithProgressResponse.model_validate(step) for step in steps],
    )


@router.post(
    "/{source}/{recipe_id}", response_model=StepResponse, status_code=status.HTTP_201_CREATED
)
async def add_step(
    step_data: StepCreate,
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    coordinator: Annotated[StepCoordinator, Depends(get_step_coordinator)],
):
    """Insert a step at step_number (or append), shifting later steps."""
    return coordinator.add_step(ref, step_data.step_number, step_data.description, current_user.id)


@router.patch("/{step_id}", response_model=StepResponse)
async def update_step(
    step_id: int,
    step_data: StepUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    coordinator: Annotated[StepCoordinator, Depends(get_step_coordinator)],
):
    """Edit a step's description."""
    return coordinator.edit_description(step_id, step_data.description, current_user.id)


@router.delete("/{step_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_step(
    step_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    coordinator: Annotated[StepCoordinator, Depends(get_step_coordinator)],
):
    """Delete a step. The last remaining step of a recipe cannot be deleted."""
    coordinator.delete_step(step_id, current_user.id)


@router.post("/{source}/{recipe_id}/{number}/complete", response_model=StepProgressResponse)
async def complete_step(
    number: int,
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    coordinator: Annotated[StepCoordinator, Depends(get_step_coordinator)],
):
    """Mark a step as completed."""
    return await _toggle(coordinator, ref, number, True, current_user.id)


@router.post("/{source}/{recipe_id}/{number}/uncomplete", response_model=StepProgressResponse)
async def uncomplete_step(
    number: int,
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    coordinator: Annotated[StepCoordinator, Depends(get_step_coordinator)],
):
    """Mark a step as not completed."""
    return await _toggle(coordinator, ref, number, False, current_user.id)


@router.delete("/{source}/{recipe_id}/progress", status_code=status.HTTP_204_NO_CONTENT)
async def reset_progress(
    ref: Annotated[RecipeRef, Depends(get_recipe_ref)],
    current_user: Annotated[User, Depends(get_current_user)],
    coordinator: Annotated[StepCoordinator, Depends(get_step_coordinator)],
):
    """Restart cooking: forget the current user's progress on this recipe."""
    coordinator.reset_progress(ref, current_user.id)


async def _toggle(
    coordinator: StepCoordinator, ref: RecipeRef, number: int, completed: bool, user_id: int
) -> StepProgressResponse:
    entry = await coordinator.set_step_completion(ref, number, completed, user_id)
    if entry is None:
        # No such step: nothing to toggle
        return StepProgressResponse(step_number=number, is_completed=False)
    return StepProgressResponse(
        step_number=entry.step_number,
        is_completed=entry.is_completed,
        completed_at=entry.completed_at,
    )
