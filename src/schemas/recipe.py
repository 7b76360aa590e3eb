"""Personal recipe schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.step import StepResponse

# --- Ingredients (shared by personal and family recipes) ---


class IngredientCreate(BaseModel):
    """Create a recipe ingredient."""

    name: str = Field(..., min_length=1, max_length=255)
    amount: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)


class IngredientUpdate(BaseModel):
    """Update a recipe ingredient."""

    name: str | None = Field(None, min_length=1, max_length=255)
    amount: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)


class IngredientResponse(BaseModel):
    """Recipe ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    name: str
    amount: float | None
    unit: str | None


# --- Recipe ---


class RecipeCreate(BaseModel):
    """Create a new personal recipe."""

    title: str = Field(..., min_length=1, max_length=255)
    image_url: str | None = Field(None, max_length=1000)
    ready_in_minutes: int | None = Field(None, ge=0)
    is_vegan: bool = False
    is_vegetarian: bool = False
    is_gluten_free: bool = False
    servings: int | None = Field(None, ge=1)
    summary: str | None = Field(None, max_length=5000)
    ingredients: list[IngredientCreate] = []
    steps: list[str] = Field(default_factory=list)  # Preparation steps in order


class RecipeUpdate(BaseModel):
    """Update recipe metadata (steps and ingredients have their own endpoints)."""

    title: str | None = Field(None, min_length=1, max_length=255)
    image_url: str | None = Field(None, max_length=1000)
    ready_in_minutes: int | None = Field(None, ge=0)
    is_vegan: bool | None = None
    is_vegetarian: bool | None = None
    is_gluten_free: bool | None = None
    servings: int | None = Field(None, ge=1)
    summary: str | None = Field(None, max_length=5000)


class RecipeResponse(BaseModel):
    """Personal recipe with ingredients and steps."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    image_url: str | None
    ready_in_minutes: int | None
    popularity: int
    is_vegan: bool
    is_vegetarian: bool
    is_gluten_free: bool
    servings: int | None
    summary: str | None
    ingredients: list[IngredientResponse]
    steps: list[StepResponse]
    created_at: datetime
    updated_at: datetime


class RecipeListResponse(BaseModel):
    """Recipe list item (without ingredients and steps)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    image_url: str | None
    ready_in_minutes: int | None
    popularity: int
    is_vegan: bool
    is_vegetarian: bool
    is_gluten_free: bool
    servings: int | None
    created_at: datetime
