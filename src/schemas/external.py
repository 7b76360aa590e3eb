"""Schemas for recipes from the external search API."""

from pydantic import BaseModel


class ExternalRecipeOverview(BaseModel):
    """Search result / random recipe card."""

    id: int
    title: str | None = None
    image: str | None = None
    ready_in_minutes: int | None = None
    popularity: int = 0
    vegan: bool = False
    vegetarian: bool = False
    gluten_free: bool = False


class ExternalIngredient(BaseModel):
    name: str | None = None
    amount: float | None = None
    unit: str | None = None


class InstructionStep(BaseModel):
    step_number: int
    description: str


class ExternalRecipeDetails(ExternalRecipeOverview):
    """Full recipe page."""

    summary: str | None = None
    servings: int | None = None
    instructions: str | None = None
    ingredients: list[ExternalIngredient] = []
    steps: list[InstructionStep] = []
