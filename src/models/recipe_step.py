"""RecipePreparationStep model for ordered preparation instructions."""

from sqlalchemy import Column, Index, Integer, Text, UniqueConstraint

from src.database import Base
from src.models.mixins import TimestampMixin
from src.models.recipe_ref import RecipeRefMixin


class RecipePreparationStep(Base, RecipeRefMixin, TimestampMixin):
    """One numbered instruction of a personal or family recipe.

    Step numbers of a recipe always form the sequence 1..N.
    """

    __tablename__ = "recipe_preparation_steps"

    id = Column(Integer, primary_key=True, index=True)
    step_number = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "recipe_source", "recipe_id", "step_number", name="uq_recipe_step_number"
        ),
        Index("ix_recipe_steps_ref", "recipe_source", "recipe_id"),
    )
