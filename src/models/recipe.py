"""Personal recipe (UserRecipe) and UserRecipeIngredient models."""

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import RecipeSource
from src.models.mixins import TimestampMixin
from src.models.recipe_ref import RecipeRef


class UserRecipe(Base, TimestampMixin):
    """Recipe authored by a user for personal use."""

    __tablename__ = "user_recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    image_url = Column(String(1000), nullable=True)
    ready_in_minutes = Column(Integer, nullable=True)
    popularity = Column(Integer, nullable=False, default=0)
    is_vegan = Column(Boolean, nullable=False, default=False)
    is_vegetarian = Column(Boolean, nullable=False, default=False)
    is_gluten_free = Column(Boolean, nullable=False, default=False)
    servings = Column(Integer, nullable=True)
    summary = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", backref="recipes")
    ingredients = relationship(
        "UserRecipeIngredient", back_populates="recipe", cascade="all, delete-orphan"
    )
    steps = relationship(
        "RecipePreparationStep",
        primaryjoin="and_(RecipePreparationStep.recipe_source == 'personal', "
        "foreign(RecipePreparationStep.recipe_id) == UserRecipe.id)",
        order_by="RecipePreparationStep.step_number",
        viewonly=True,
    )

    source = RecipeSource.PERSONAL

    @property
    def recipe_ref(self) -> RecipeRef:
        return RecipeRef.personal(self.id)


class UserRecipeIngredient(Base, TimestampMixin):
    """Ingredient within a personal recipe."""

    __tablename__ = "user_recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("user_recipes.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=True)
    unit = Column(String(50), nullable=True)

    # Relationships
    recipe = relationship("UserRecipe", back_populates="ingredients")
