"""Persistence for per-user step completion progress."""

from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.models.recipe_progress import RecipePreparationProgress
from src.models.recipe_ref import RecipeRef


class ProgressStore:
    """Row-level operations on recipe_preparation_progress. Nothing here commits."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self, ref: RecipeRef):
        return self.db.query(RecipePreparationProgress).filter(
            RecipePreparationProgress.matches(ref)
        )

    def _user_query(self, user_id: int, ref: RecipeRef):
        return self._query(ref).filter(RecipePreparationProgress.user_id == user_id)

    def initialize(self, user_id: int, ref: RecipeRef, number: int) -> RecipePreparationProgress:
        """Create one incomplete entry. Callers check for an existing row first."""
        entry = RecipePreparationProgress(
            user_id=user_id,
            recipe_source=ref.source.value,
            recipe_id=ref.recipe_id,
            step_number=number,
            is_completed=False,
            completed_at=None,
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def complete(self, user_id: int, ref: RecipeRef, number: int) -> int:
        """Mark a step completed. Returns rows changed (0 if absent or already done)."""
        return (
            self._user_query(user_id, ref)
            .filter(
                RecipePreparationProgress.step_number == number,
                RecipePreparationProgress.is_completed.is_(False),
            )
            .update(
                {
                    RecipePreparationProgress.is_completed: True,
                    RecipePreparationProgress.completed_at: datetime.now(UTC),
                },
                synchronize_session="fetch",
            )
        )

    def uncomplete(self, user_id: int, ref: RecipeRef, number: int) -> int:
        """Clear a step's completion flag and timestamp."""
        return (
            self._user_query(user_id, ref)
            .filter(
                RecipePreparationProgress.step_number == number,
                RecipePreparationProgress.is_completed.is_(True),
            )
            .update(
                {
                    RecipePreparationProgress.is_completed: False,
                    RecipePreparationProgress.completed_at: None,
                },
                synchronize_session="fetch",
            )
        )

    def list_entries(self, user_id: int, ref: RecipeRef) -> list[RecipePreparationProgress]:
        return (
            self._user_query(user_id, ref)
            .order_by(RecipePreparationProgress.step_number)
            .all()
        )

    def shift_forward(self, ref: RecipeRef, from_number: int) -> int:
        """Increment every user's entries numbered >= from_number, highest first."""
        entries = (
            self._query(ref)
            .populate_existing()
            .filter(RecipePreparationProgress.step_number >= from_number)
            .order_by(RecipePreparationProgress.step_number.desc())
            .all()
        )
        for entry in entries:
            entry.step_number += 1
            self.db.flush()
        return len(entries)

    def shift_backward(self, ref: RecipeRef, from_number: int) -> int:
        """Decrement every user's entries numbered > from_number, lowest first."""
        entries = (
            self._query(ref)
            .populate_existing()
            .filter(RecipePreparationProgress.step_number > from_number)
            .order_by(RecipePreparationProgress.step_number.asc())
            .all()
        )
        for entry in entries:
            entry.step_number -= 1
            self.db.flush()
        return len(entries)

    def delete_number(self, ref: RecipeRef, number: int) -> int:
        """Remove every user's entry for one step number."""
        deleted = (
            self._query(ref)
            .filter(RecipePreparationProgress.step_number == number)
            .delete(synchronize_session="fetch")
        )
        return deleted

    def reset(self, user_id: int, ref: RecipeRef) -> int:
        """Delete all of a user's entries for a recipe. The next read re-initializes them."""
        return self._user_query(user_id, ref).delete(synchronize_session="fetch")

    def delete_all(self, ref: RecipeRef) -> int:
        return self._query(ref).delete(synchronize_session="fetch")
