"""FamilyRecipe and FamilyRecipeIngredient models."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import RecipeSource
from src.models.mixins import TimestampMixin
from src.models.recipe_ref import RecipeRef


class FamilyRecipe(Base, TimestampMixin):
    """Recipe handed down by a family member, stored by the user who submitted it."""

    __tablename__ = "family_recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    owner_name = Column(String(255), nullable=False)  # Family member the recipe comes from
    when_to_prepare = Column(String(255), nullable=True)  # Occasion, e.g. "Passover"
    image_url = Column(String(1000), nullable=True)
    ready_in_minutes = Column(Integer, nullable=True)
    servings = Column(Integer, nullable=True)

    # Relationships
    user = relationship("User", backref="family_recipes")
    ingredients = relationship(
        "FamilyRecipeIngredient", back_populates="recipe", cascade="all, delete-orphan"
    )
    steps = relationship(
        "RecipePreparationStep",
        primaryjoin="and_(RecipePreparationStep.recipe_source == 'family', "
        "foreign(RecipePreparationStep.recipe_id) == FamilyRecipe.id)",
        order_by="RecipePreparationStep.step_number",
        viewonly=True,
    )

    source = RecipeSource.FAMILY

    @property
    def recipe_ref(self) -> RecipeRef:
        return RecipeRef.family(self.id)


class FamilyRecipeIngredient(Base, TimestampMixin):
    """Ingredient within a family recipe."""

    __tablename__ = "family_recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("family_recipes.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    amount = Column(Float, nullable=True)
    unit = Column(String(50), nullable=True)

    # Relationships
    recipe = relationship("FamilyRecipe", back_populates="ingredients")
