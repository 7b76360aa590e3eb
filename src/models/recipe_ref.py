"""Tagged reference to a personal, family or external recipe."""

from dataclasses import dataclass

from sqlalchemy import Column, Integer, String

from src.models.enums import RecipeSource


@dataclass(frozen=True)
class RecipeRef:
    """Identifies exactly one recipe: its source tag plus the id within that source."""

    source: RecipeSource
    recipe_id: int

    @classmethod
    def personal(cls, recipe_id: int) -> "RecipeRef":
        return cls(RecipeSource.PERSONAL, recipe_id)

    @classmethod
    def family(cls, recipe_id: int) -> "RecipeRef":
        return cls(RecipeSource.FAMILY, recipe_id)

    @classmethod
    def external(cls, recipe_id: int) -> "RecipeRef":
        return cls(RecipeSource.EXTERNAL, recipe_id)

    @property
    def is_external(self) -> bool:
        return not self.source.is_local

    def __str__(self) -> str:
        return f"{self.source.value}:{self.recipe_id}"


class RecipeRefMixin:
    """Mixin for rows keyed by a recipe reference (source tag + recipe id)."""

    recipe_source = Column(String(20), nullable=False)  # "personal" | "family" | "external"
    recipe_id = Column(Integer, nullable=False)

    @property
    def recipe_ref(self) -> RecipeRef:
        """The reference this row belongs to."""
        return RecipeRef(RecipeSource(self.recipe_source), self.recipe_id)

    @classmethod
    def matches(cls, ref: RecipeRef):
        """SQL criteria selecting rows of the given reference."""
        return (cls.recipe_source == ref.source.value) & (cls.recipe_id == ref.recipe_id)
