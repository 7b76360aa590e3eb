"""RecipeLike model holding the like counter of any recipe."""

from sqlalchemy import Column, Integer, UniqueConstraint

from src.database import Base
from src.models.mixins import TimestampMixin
from src.models.recipe_ref import RecipeRefMixin


class RecipeLike(Base, RecipeRefMixin, TimestampMixin):
    """Like counter, seeded from the recipe's popularity on the first like."""

    __tablename__ = "recipe_likes"
    __table_args__ = (UniqueConstraint("recipe_source", "recipe_id", name="uq_recipe_like_ref"),)

    id = Column(Integer, primary_key=True, index=True)
    likes_count = Column(Integer, nullable=False, default=0)
