"""Pydantic schemas for API requests and responses."""

from src.schemas.activity import (
    FavoriteResponse,
    LikeResponse,
    MealPlanCountResponse,
    MealPlanEntryResponse,
    RecipeViewResponse,
    SearchHistoryResponse,
)
from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.external import ExternalRecipeDetails, ExternalRecipeOverview, InstructionStep
from src.schemas.family_recipe import (
    FamilyRecipeCreate,
    FamilyRecipeListResponse,
    FamilyRecipeResponse,
    FamilyRecipeUpdate,
)
from src.schemas.recipe import (
    IngredientCreate,
    IngredientResponse,
    IngredientUpdate,
    RecipeCreate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from src.schemas.step import (
    RecipeStepsResponse,
    StepCreate,
    StepProgressResponse,
    StepResponse,
    StepUpdate,
    StepWithProgressResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientResponse",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "RecipeListResponse",
    "FamilyRecipeCreate",
    "FamilyRecipeUpdate",
    "FamilyRecipeResponse",
    "FamilyRecipeListResponse",
    "StepCreate",
    "StepUpdate",
    "StepResponse",
    "StepWithProgressResponse",
    "RecipeStepsResponse",
    "StepProgressResponse",
    "FavoriteResponse",
    "RecipeViewResponse",
    "SearchHistoryResponse",
    "MealPlanEntryResponse",
    "MealPlanCountResponse",
    "LikeResponse",
    "ExternalRecipeOverview",
    "ExternalRecipeDetails",
    "InstructionStep",
]
