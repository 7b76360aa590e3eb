"""RecipeView model for the "last watched" list."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, func

from src.database import Base
from src.models.recipe_ref import RecipeRefMixin


class RecipeView(Base, RecipeRefMixin):
    """A user opening a recipe. Only the most recent few are kept per user."""

    __tablename__ = "recipe_views"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    viewed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
