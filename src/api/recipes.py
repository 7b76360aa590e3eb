"""Personal recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_recipe_service
from src.database import get_db
from src.exceptions import NotFoundError
from src.models.recipe import UserRecipe, UserRecipeIngredient
from src.models.recipe_ref import RecipeRef
from src.models.user import User
from src.schemas.recipe import (
    IngredientCreate,
    IngredientResponse,
    IngredientUpdate,
    RecipeCreate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from src.services.ownership import require_owner
from src.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


def get_user_recipe(db: Session, recipe_id: int, user: User) -> UserRecipe:
    """Get a personal recipe that belongs to the user."""
    return require_owner(db, RecipeRef.personal(recipe_id), user.id)


def get_user_ingredient(db: Session, ingredient_id: int, user: User) -> UserRecipeIngredient:
    """Get an ingredient of one of the user's personal recipes."""
    ingredient = (
        db.query(UserRecipeIngredient).filter(UserRecipeIngredient.id == ingredient_id).first()
    )
    if not ingredient:
        raise NotFoundError("Ingredient not found")
    get_user_recipe(db, ingredient.recipe_id, user)
    return ingredient


@router.get("", response_model=list[RecipeListResponse])
async def list_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List all personal recipes of the current user."""
    return (
        db.query(UserRecipe)
        .filter(UserRecipe.user_id == current_user.id)
        .order_by(UserRecipe.title)
        .all()
    )


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    recipe_data: RecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Create a new recipe with ingredients and preparation steps."""
    return service.create_personal_recipe(current_user.id, recipe_data)


# --- Ingredient routes (before /{recipe_id}) ---


@router.put("/ingredients/{ingredient_id}", response_model=IngredientResponse)
async def update_ingredient(
    ingredient_id: int,
    ingredient_data: IngredientUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update an ingredient."""
    ingredient = get_user_ingredient(db, ingredient_id, current_user)

    for field, value in ingredient_data.model_dump(exclude_unset=True).items():
        setattr(ingredient, field, value)

    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.delete("/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ingredient(
    ingredient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an ingredient from a recipe."""
    ingredient = get_user_ingredient(db, ingredient_id, current_user)
    db.delete(ingredient)
    db.commit()


# --- Dynamic recipe routes (must be last) ---


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific recipe with ingredients and steps."""
    return get_user_recipe(db, recipe_id, current_user)


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: int,
    recipe_data: RecipeUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update recipe metadata (not ingredients or steps)."""
    recipe = get_user_recipe(db, recipe_id, current_user)

    for field, value in recipe_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(recipe, field, value)

    db.commit()
    db.refresh(recipe)
    return recipe


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete a recipe with its ingredients, steps and everyone's progress."""
    service.delete_recipe(RecipeRef.personal(recipe_id), current_user.id)


@router.post(
    "/{recipe_id}/ingredients",
    response_model=IngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_ingredient(
    recipe_id: int,
    ingredient_data: IngredientCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add an ingredient to a recipe."""
    recipe = get_user_recipe(db, recipe_id, current_user)

    ingredient = UserRecipeIngredient(recipe_id=recipe.id, **ingredient_data.model_dump())
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return ingredient
