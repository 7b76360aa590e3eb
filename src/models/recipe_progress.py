"""RecipePreparationProgress model for tracking step progress."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, UniqueConstraint

from src.database import Base
from src.models.mixins import TimestampMixin
from src.models.recipe_ref import RecipeRefMixin


class RecipePreparationProgress(Base, RecipeRefMixin, TimestampMixin):
    """Model for tracking one user's completion of one recipe step."""

    __tablename__ = "recipe_preparation_progress"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    step_number = Column(Integer, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)  # Set iff is_completed

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "recipe_source",
            "recipe_id",
            "step_number",
            name="uq_progress_user_recipe_step",
        ),
        Index("ix_progress_ref", "recipe_source", "recipe_id"),
    )
