"""Preparation step and progress schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StepCreate(BaseModel):
    """Add a step. Without step_number the step is appended at the end."""

    description: str = Field(..., max_length=5000)
    step_number: int | None = None


class StepUpdate(BaseModel):
    """Edit a step's description."""

    description: str = Field(..., max_length=5000)


class StepResponse(BaseModel):
    """A stored preparation step."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_source: str
    recipe_id: int
    step_number: int
    description: str


class StepWithProgressResponse(BaseModel):
    """A step decorated with the current user's completion state."""

    model_config = ConfigDict(from_attributes=True)

    step_id: int | None
    step_number: int
    description: str
    is_completed: bool
    completed_at: datetime | None


class RecipeStepsResponse(BaseModel):
    """All steps of a recipe with progress."""

    recipe_source: str
    recipe_id: int
    total_steps: int
    completed_steps: int
    steps: list[StepWithProgressResponse]


class StepProgressResponse(BaseModel):
    """Completion state of one step after a toggle."""

    step_number: int
    is_completed: bool
    completed_at: datetime | None = None
