"""UserFavorite model."""

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint

from src.database import Base
from src.models.mixins import TimestampMixin
from src.models.recipe_ref import RecipeRefMixin


class UserFavorite(Base, RecipeRefMixin, TimestampMixin):
    """Recipe saved to a user's favorites."""

    __tablename__ = "user_favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "recipe_source", "recipe_id", name="uq_favorite_user_recipe"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
