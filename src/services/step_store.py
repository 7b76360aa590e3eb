"""Persistence for ordered recipe preparation steps."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from src.exceptions import NotFoundError
from src.models.recipe_ref import RecipeRef
from src.models.recipe_step import RecipePreparationStep


class StepStore:
    """Row-level operations on recipe_preparation_steps.

    Never renumbers on its own: keeping numbers contiguous is the job of
    StepCoordinator. Nothing here commits; callers own the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self, ref: RecipeRef):
        return self.db.query(RecipePreparationStep).filter(RecipePreparationStep.matches(ref))

    def append(self, ref: RecipeRef, number: int, description: str) -> RecipePreparationStep:
        """Insert a step at the given number."""
        step = RecipePreparationStep(
            recipe_source=ref.source.value,
            recipe_id=ref.recipe_id,
            step_number=number,
            description=description,
        )
        self.db.add(step)
        self.db.flush()
        return step

    def list_steps(self, ref: RecipeRef) -> list[RecipePreparationStep]:
        """All steps of a recipe, ascending by number."""
        return self._query(ref).order_by(RecipePreparationStep.step_number).all()

    def get(self, step_id: int) -> RecipePreparationStep | None:
        """Load a step, bypassing any stale copy held by the session."""
        return (
            self.db.query(RecipePreparationStep)
            .populate_existing()
            .filter(RecipePreparationStep.id == step_id)
            .first()
        )

    def count(self, ref: RecipeRef) -> int:
        return (
            self.db.query(func.count(RecipePreparationStep.id))
            .filter(RecipePreparationStep.matches(ref))
            .scalar()
        )

    def max_number(self, ref: RecipeRef) -> int:
        """Highest step number of the recipe, 0 when it has no steps."""
        result = (
            self.db.query(func.max(RecipePreparationStep.step_number))
            .filter(RecipePreparationStep.matches(ref))
            .scalar()
        )
        return result or 0

    def update_description(self, step_id: int, text: str) -> RecipePreparationStep:
        step = self.get(step_id)
        if step is None:
            raise NotFoundError("Step not found")
        step.description = text
        self.db.flush()
        return step

    def delete(self, step_id: int) -> RecipePreparationStep:
        """Delete one step and return the removed row."""
        step = self.get(step_id)
        if step is None:
            raise NotFoundError("Step not found")
        self.db.delete(step)
        self.db.flush()
        return step

    def delete_all(self, ref: RecipeRef) -> int:
        return self._query(ref).delete(synchronize_session="fetch")

    def shift_forward(self, ref: RecipeRef, from_number: int) -> int:
        """Increment every step numbered >= from_number.

        Rows are flushed one at a time from the highest number down, so the
        unique (recipe, step_number) constraint holds after every statement.
        """
        steps = (
            self._query(ref)
            .populate_existing()
            .filter(RecipePreparationStep.step_number >= from_number)
            .order_by(RecipePreparationStep.step_number.desc())
            .all()
        )
        for step in steps:
            step.step_number += 1
            self.db.flush()
        return len(steps)

    def shift_backward(self, ref: RecipeRef, from_number: int) -> int:
        """Decrement every step numbered > from_number, lowest number first."""
        steps = (
            self._query(ref)
            .populate_existing()
            .filter(RecipePreparationStep.step_number > from_number)
            .order_by(RecipePreparationStep.step_number.asc())
            .all()
        )
        for step in steps:
            step.step_number -= 1
            self.db.flush()
        return len(steps)
