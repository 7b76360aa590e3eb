"""Step coordinator: keeps step numbering and progress rows consistent.

Every mutation of step numbers goes through StepCoordinator. Each mutating
operation runs in one transaction that starts by locking the owning recipe
row, so two requests editing the same recipe cannot interleave their
shift-and-insert or delete-and-shift sequences.
"""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.exceptions import (
    ExternalServiceError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from src.models.recipe_progress import RecipePreparationProgress
from src.models.recipe_ref import RecipeRef
from src.models.recipe_step import RecipePreparationStep
from src.services.ownership import require_owner
from src.services.progress_store import ProgressStore
from src.services.spoonacular import SpoonacularService
from src.services.step_store import StepStore

logger = logging.getLogger(__name__)


@dataclass
class StepWithProgress:
    """A recipe step decorated with the current user's completion state."""

    step_id: int | None  # None for steps fetched from the external API
    step_number: int
    description: str
    is_completed: bool = False
    completed_at: datetime | None = None


@dataclass
class _StepLine:
    step_id: int | None
    step_number: int
    description: str


class StepCoordinator:
    """Adds, deletes and edits steps and tracks per-user progress on them."""

    def __init__(self, db: Session, step_source: SpoonacularService | None = None):
        self.db = db
        self.steps = StepStore(db)
        self.progress = ProgressStore(db)
        self.step_source = step_source

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # --- Mutations ---

    def add_step(
        self,
        ref: RecipeRef,
        requested_number: int | None,
        description: str,
        user_id: int,
    ) -> RecipePreparationStep:
        """Insert a step, shifting later steps (and their progress) up by one.

        requested_number=None appends. Numbers past the end are clamped to
        max + 1 so no gap can appear.
        """
        if ref.is_external:
            raise InvalidArgumentError("Steps of external recipes cannot be edited")
        if requested_number is not None and requested_number < 1:
            raise InvalidArgumentError("Step number must be a positive integer")
        description = (description or "").strip()
        if not description:
            raise InvalidArgumentError("Step description is required")

        with self._transaction():
            require_owner(self.db, ref, user_id, lock=True)

            max_number = self.steps.max_number(ref)
            if requested_number is None:
                number = max_number + 1
            else:
                number = min(requested_number, max_number + 1)

            if number <= max_number:
                # Steps first, so progress never points at a vacated number
                self.steps.shift_forward(ref, number)
                self.progress.shift_forward(ref, number)

            step = self.steps.append(ref, number, description)
            self.progress.initialize(user_id, ref, number)
            step_id = step.id

        logger.info(f"Added step {number} to recipe {ref} (user {user_id})")
        return self.steps.get(step_id)

    def delete_step(self, step_id: int, user_id: int) -> None:
        """Delete a step and close the gap it leaves in steps and progress."""
        with self._transaction():
            step = self.steps.get(step_id)
            if step is None:
                raise NotFoundError("Step not found")
            ref = step.recipe_ref
            require_owner(self.db, ref, user_id, lock=True)

            # Re-read under the lock; a concurrent mutation may have renumbered it
            step = self.steps.get(step_id)
            if step is None:
                raise NotFoundError("Step not found")
            if self.steps.count(ref) <= 1:
                logger.warning(f"Refused to delete the last step of recipe {ref}")
                raise InvalidStateError("A recipe must keep at least one step")

            number = step.step_number
            self.steps.delete(step_id)
            self.progress.delete_number(ref, number)
            self.steps.shift_backward(ref, number)
            self.progress.shift_backward(ref, number)

        logger.info(f"Deleted step {number} of recipe {ref} (user {user_id})")

    def edit_description(self, step_id: int, text: str, user_id: int) -> RecipePreparationStep:
        """Change a step's text. The number cannot change through this path."""
        text = (text or "").strip()
        if not text:
            raise InvalidArgumentError("Step description is required")

        with self._transaction():
            step = self.steps.get(step_id)
            if step is None:
                raise NotFoundError("Step not found")
            require_owner(self.db, step.recipe_ref, user_id)
            self.steps.update_description(step_id, text)

        return self.steps.get(step_id)

    # --- Authoring helpers used inside a recipe's own transaction ---

    def author_steps(self, ref: RecipeRef, descriptions: Sequence[str], user_id: int) -> None:
        """Number a new recipe's steps 1..N and initialize the author's progress.

        Flushes only; the recipe service commits together with the recipe row.
        """
        number = 0
        for description in descriptions:
            description = (description or "").strip()
            if not description:
                raise InvalidArgumentError("Step description is required")
            number += 1
            self.steps.append(ref, number, description)
            self.progress.initialize(user_id, ref, number)

    def discard_steps(self, ref: RecipeRef) -> None:
        """Remove all steps and every user's progress of a recipe being deleted. Flushes only."""
        self.progress.delete_all(ref)
        self.steps.delete_all(ref)

    # --- Progress ---

    async def get_steps_with_progress(self, ref: RecipeRef, user_id: int) -> list[StepWithProgress]:
        """Steps of a recipe in order, each with the user's completion state.

        Progress rows are created on first access (and filled in for steps
        the user has no row for), so the result always covers every step.
        """
        self._authorize_read(ref, user_id)
        lines = await self._load_steps(ref)
        lines, entries = self._ensure_progress(ref, user_id, lines)
        return self._decorate(lines, entries)

    async def set_step_completion(
        self, ref: RecipeRef, number: int, completed: bool, user_id: int
    ) -> RecipePreparationProgress | None:
        """Complete or uncomplete one step. Unknown step numbers are a silent no-op."""
        if number < 1:
            raise InvalidArgumentError("Step number must be a positive integer")
        self._authorize_read(ref, user_id)

        entries = self.progress.list_entries(user_id, ref)
        if not entries or not ref.is_external:
            lines = await self._load_steps(ref)
            self._ensure_progress(ref, user_id, lines)

        with self._transaction():
            if completed:
                changed = self.progress.complete(user_id, ref, number)
            else:
                changed = self.progress.uncomplete(user_id, ref, number)

        if changed:
            logger.info(
                f"User {user_id} marked step {number} of {ref} "
                f"{'completed' if completed else 'not completed'}"
            )
        return next(
            (e for e in self.progress.list_entries(user_id, ref) if e.step_number == number),
            None,
        )

    def reset_progress(self, ref: RecipeRef, user_id: int) -> int:
        """Delete the user's progress for a recipe, restarting the cooking session."""
        self._authorize_read(ref, user_id)
        with self._transaction():
            deleted = self.progress.reset(user_id, ref)
        logger.info(f"Reset {deleted} progress entries of {ref} for user {user_id}")
        return deleted

    # --- Internals ---

    def _authorize_read(self, ref: RecipeRef, user_id: int) -> None:
        require_owner(self.db, ref, user_id)

    def _local_steps(self, ref: RecipeRef) -> list[_StepLine]:
        return [
            _StepLine(step.id, step.step_number, step.description)
            for step in self.steps.list_steps(ref)
        ]

    async def _load_steps(self, ref: RecipeRef) -> list[_StepLine]:
        if not ref.is_external:
            return self._local_steps(ref)

        if self.step_source is None:
            raise ExternalServiceError("No external recipe source configured", http_status=503)
        # End the read transaction so no connection idles while the API is awaited
        self.db.commit()
        fetched = await self.step_source.fetch_steps(ref.recipe_id)
        return [
            _StepLine(None, number, description)
            for number, description in sorted(fetched, key=lambda pair: pair[0])
        ]

    def _ensure_progress(
        self, ref: RecipeRef, user_id: int, lines: list[_StepLine]
    ) -> tuple[list[_StepLine], list[RecipePreparationProgress]]:
        """Create missing incomplete progress rows for the user, one per step.

        Local recipes are locked and their steps re-read before any row is
        written, so a step deleted after `lines` was loaded never gets a
        progress row. Returns the steps and entries the result is based on.
        """
        entries = self.progress.list_entries(user_id, ref)
        if not self._missing_numbers(lines, entries):
            return lines, entries

        try:
            with self._transaction():
                if not ref.is_external:
                    require_owner(self.db, ref, user_id, lock=True)
                    lines = self._local_steps(ref)
                    entries = self.progress.list_entries(user_id, ref)
                missing = self._missing_numbers(lines, entries)
                for number in missing:
                    self.progress.initialize(user_id, ref, number)
            if missing:
                logger.info(
                    f"Initialized {len(missing)} progress entries of {ref} for user {user_id}"
                )
        except IntegrityError:
            # A concurrent request initialized the same rows first
            logger.info(f"Progress of {ref} for user {user_id} was initialized concurrently")

        return lines, self.progress.list_entries(user_id, ref)

    @staticmethod
    def _missing_numbers(
        lines: list[_StepLine], entries: list[RecipePreparationProgress]
    ) -> list[int]:
        known = {entry.step_number for entry in entries}
        return [line.step_number for line in lines if line.step_number not in known]

    @staticmethod
    def _decorate(
        lines: list[_StepLine], entries: list[RecipePreparationProgress]
    ) -> list[StepWithProgress]:
        by_number = {entry.step_number: entry for entry in entries}
        result = []
        for line in sorted(lines, key=lambda line: line.step_number):
            entry = by_number.get(line.step_number)
            result.append(
                StepWithProgress(
                    step_id=line.step_id,
                    step_number=line.step_number,
                    description=line.description,
                    is_completed=bool(entry and entry.is_completed),
                    completed_at=entry.completed_at if entry else None,
                )
            )
        return result
