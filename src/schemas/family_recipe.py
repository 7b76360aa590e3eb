"""Family recipe schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.recipe import IngredientCreate, IngredientResponse
from src.schemas.step import StepResponse


class FamilyRecipeCreate(BaseModel):
    """Create a family recipe."""

    title: str = Field(..., min_length=1, max_length=255)
    owner_name: str = Field(..., min_length=1, max_length=255)
    when_to_prepare: str | None = Field(None, max_length=255)
    image_url: str | None = Field(None, max_length=1000)
    ready_in_minutes: int | None = Field(None, ge=0)
    servings: int | None = Field(None, ge=1)
    ingredients: list[IngredientCreate] = []
    steps: list[str] = Field(default_factory=list)


class FamilyRecipeUpdate(BaseModel):
    """Update family recipe metadata."""

    title: str | None = Field(None, min_length=1, max_length=255)
    owner_name: str | None = Field(None, min_length=1, max_length=255)
    when_to_prepare: str | None = Field(None, max_length=255)
    image_url: str | None = Field(None, max_length=1000)
    ready_in_minutes: int | None = Field(None, ge=0)
    servings: int | None = Field(None, ge=1)


class FamilyRecipeResponse(BaseModel):
    """Family recipe with ingredients and steps."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    owner_name: str
    when_to_prepare: str | None
    image_url: str | None
    ready_in_minutes: int | None
    servings: int | None
    ingredients: list[IngredientResponse]
    steps: list[StepResponse]
    created_at: datetime
    updated_at: datetime


class FamilyRecipeListResponse(BaseModel):
    """Family recipe list item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    owner_name: str
    when_to_prepare: str | None
    image_url: str | None
    ready_in_minutes: int | None
    servings: int | None
    created_at: datetime
