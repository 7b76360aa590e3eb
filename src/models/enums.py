"""Enums for model fields."""

from enum import Enum


class RecipeSource(str, Enum):
    """Where a recipe lives.

    Personal and family recipes are authored locally and owned by a user.
    External recipes come from the Spoonacular search API and are readable
    by everyone.
    """

    PERSONAL = "personal"
    FAMILY = "family"
    EXTERNAL = "external"

    @property
    def is_local(self) -> bool:
        """Check if recipes of this source are stored (and owned) locally."""
        return self in (RecipeSource.PERSONAL, RecipeSource.FAMILY)
