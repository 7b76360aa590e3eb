"""User activity schemas: favorites, views, search history, meal plan and likes."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class FavoriteResponse(BaseModel):
    """A recipe in the user's favorites."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_source: str
    recipe_id: int
    created_at: datetime


class RecipeViewResponse(BaseModel):
    """A recently viewed recipe."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_source: str
    recipe_id: int
    viewed_at: datetime


class SearchHistoryResponse(BaseModel):
    """The user's last recipe search."""

    model_config = ConfigDict(from_attributes=True)

    search_query: str
    cuisine_filter: str | None
    diet_filter: str | None
    intolerance_filter: str | None
    results_limit: int
    searched_at: datetime


class MealPlanEntryResponse(BaseModel):
    """A recipe in the meal plan."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_source: str
    recipe_id: int
    order_in_meal: int


class MealPlanCountResponse(BaseModel):
    count: int


class LikeResponse(BaseModel):
    """Likes total after a like."""

    recipe_source: str
    recipe_id: int
    likes: int
