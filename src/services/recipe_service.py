"""Recipe service for creating and deleting personal and family recipes."""

import logging

from sqlalchemy.orm import Session

from src.models.family_recipe import FamilyRecipe, FamilyRecipeIngredient
from src.models.recipe import UserRecipe, UserRecipeIngredient
from src.models.recipe_ref import RecipeRef
from src.schemas.family_recipe import FamilyRecipeCreate
from src.schemas.recipe import RecipeCreate
from src.services.activity_service import ActivityService
from src.services.meal_plan_service import MealPlanService
from src.services.ownership import require_owner
from src.services.step_coordinator import StepCoordinator

logger = logging.getLogger(__name__)


class RecipeService:
    """Service for recipe lifecycle operations that touch steps and activity."""

    def __init__(self, db: Session):
        self.db = db
        self.coordinator = StepCoordinator(db)

    def create_personal_recipe(self, user_id: int, data: RecipeCreate) -> UserRecipe:
        """Create a personal recipe with its ingredients and numbered steps."""
        recipe = UserRecipe(
            user_id=user_id,
            **data.model_dump(exclude={"ingredients", "steps"}),
        )
        for ing_data in data.ingredients:
            recipe.ingredients.append(UserRecipeIngredient(**ing_data.model_dump()))
        return self._save_with_steps(recipe, data.steps, user_id)

    def create_family_recipe(self, user_id: int, data: FamilyRecipeCreate) -> FamilyRecipe:
        """Create a family recipe with its ingredients and numbered steps."""
        recipe = FamilyRecipe(
            user_id=user_id,
            **data.model_dump(exclude={"ingredients", "steps"}),
        )
        for ing_data in data.ingredients:
            recipe.ingredients.append(FamilyRecipeIngredient(**ing_data.model_dump()))
        return self._save_with_steps(recipe, data.steps, user_id)

    def delete_recipe(self, ref: RecipeRef, user_id: int) -> None:
        """Delete a local recipe together with its steps, everyone's progress and activity."""
        try:
            recipe = require_owner(self.db, ref, user_id, lock=True)
            self.coordinator.discard_steps(ref)
            ActivityService(self.db).purge_recipe(ref)
            MealPlanService(self.db).purge_recipe(ref)
            self.db.delete(recipe)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"User {user_id} deleted recipe {ref}")

    def _save_with_steps(self, recipe, descriptions: list[str], user_id: int):
        try:
            self.db.add(recipe)
            self.db.flush()  # Get recipe.id
            self.coordinator.author_steps(recipe.recipe_ref, descriptions, user_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(recipe)
        logger.info(
            f"User {user_id} created recipe {recipe.recipe_ref} with {len(descriptions)} steps"
        )
        return recipe
