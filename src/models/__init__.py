"""SQLAlchemy models."""

from src.models.enums import RecipeSource
from src.models.family_recipe import FamilyRecipe, FamilyRecipeIngredient
from src.models.favorite import UserFavorite
from src.models.meal_plan import MealPlan
from src.models.recipe import UserRecipe, UserRecipeIngredient
from src.models.recipe_like import RecipeLike
from src.models.recipe_progress import RecipePreparationProgress
from src.models.recipe_ref import RecipeRef
from src.models.recipe_step import RecipePreparationStep
from src.models.recipe_view import RecipeView
from src.models.search_history import SearchHistory
from src.models.user import User

__all__ = [
    "User",
    "RecipeSource",
    "RecipeRef",
    "UserRecipe",
    "UserRecipeIngredient",
    "FamilyRecipe",
    "FamilyRecipeIngredient",
    "RecipePreparationStep",
    "RecipePreparationProgress",
    "UserFavorite",
    "RecipeView",
    "SearchHistory",
    "MealPlan",
    "RecipeLike",
]
