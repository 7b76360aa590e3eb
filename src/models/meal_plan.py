"""MealPlan model."""

from sqlalchemy import Column, ForeignKey, Integer

from src.database import Base
from src.models.mixins import TimestampMixin
from src.models.recipe_ref import RecipeRefMixin


class MealPlan(Base, RecipeRefMixin, TimestampMixin):
    """One recipe in a user's meal plan. order_in_meal runs 1..N per user."""

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    order_in_meal = Column(Integer, nullable=False)
