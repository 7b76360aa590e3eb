"""Meal plan service: an ordered list of recipes per user."""

import logging

from sqlalchemy.orm import Session

from src.exceptions import NotFoundError
from src.models.meal_plan import MealPlan
from src.models.recipe_ref import RecipeRef
from src.services.ownership import require_owner

logger = logging.getLogger(__name__)


class MealPlanService:
    """Keeps each user's order_in_meal values contiguous from 1."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self, user_id: int):
        return self.db.query(MealPlan).filter(MealPlan.user_id == user_id)

    def list_entries(self, user_id: int) -> list[MealPlan]:
        return self._query(user_id).order_by(MealPlan.order_in_meal).all()

    def count(self, user_id: int) -> int:
        return self._query(user_id).count()

    def add(self, user_id: int, ref: RecipeRef) -> MealPlan:
        """Append a recipe to the end of the user's meal plan."""
        require_owner(self.db, ref, user_id)
        entry = MealPlan(
            user_id=user_id,
            recipe_source=ref.source.value,
            recipe_id=ref.recipe_id,
            order_in_meal=self.count(user_id) + 1,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"User {user_id} added {ref} to meal plan at position {entry.order_in_meal}")
        return entry

    def remove(self, user_id: int, entry_id: int) -> None:
        """Remove one entry and move the later ones up by one."""
        entry = self._query(user_id).filter(MealPlan.id == entry_id).first()
        if entry is None:
            raise NotFoundError("Meal plan entry not found")
        self._remove_entry(entry)
        self.db.commit()

    def clear(self, user_id: int) -> int:
        deleted = self._query(user_id).delete(synchronize_session="fetch")
        self.db.commit()
        logger.info(f"Cleared {deleted} meal plan entries of user {user_id}")
        return deleted

    def purge_recipe(self, ref: RecipeRef) -> None:
        """Drop a deleted recipe from every meal plan. Flushes only."""
        entries = (
            self.db.query(MealPlan)
            .filter(MealPlan.matches(ref))
            .order_by(MealPlan.order_in_meal.desc())
            .all()
        )
        for entry in entries:
            self._remove_entry(entry)

    def _remove_entry(self, entry: MealPlan) -> None:
        user_id, order = entry.user_id, entry.order_in_meal
        self.db.delete(entry)
        self.db.flush()
        later = (
            self._query(user_id)
            .filter(MealPlan.order_in_meal > order)
            .order_by(MealPlan.order_in_meal)
            .all()
        )
        for row in later:
            row.order_in_meal -= 1
        self.db.flush()
