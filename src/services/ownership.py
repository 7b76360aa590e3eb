"""Ownership checks for recipe references."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from src.exceptions import ForbiddenError, NotFoundError
from src.models.enums import RecipeSource
from src.models.family_recipe import FamilyRecipe
from src.models.recipe import UserRecipe
from src.models.recipe_ref import RecipeRef

OWNED_RECIPE_MODELS = {
    RecipeSource.PERSONAL: UserRecipe,
    RecipeSource.FAMILY: FamilyRecipe,
}


def is_owned_by(db: Session, ref: RecipeRef, user_id: int) -> bool:
    """Check whether a user may modify the referenced recipe.

    External recipes are public and always pass.
    """
    if ref.is_external:
        return True
    model = OWNED_RECIPE_MODELS[ref.source]
    row = (
        db.query(model.id)
        .filter(model.id == ref.recipe_id, model.user_id == user_id)
        .first()
    )
    return row is not None


def require_owner(
    db: Session, ref: RecipeRef, user_id: int, lock: bool = False
) -> UserRecipe | FamilyRecipe | None:
    """Return the locally stored recipe if the user owns it.

    With lock=True the recipe row is selected FOR UPDATE and its updated_at
    is bumped, which serializes concurrent step mutations on the same recipe
    until the transaction ends. Returns None for external references.
    """
    if ref.is_external:
        return None

    model = OWNED_RECIPE_MODELS[ref.source]
    query = db.query(model).filter(model.id == ref.recipe_id)
    if lock:
        # Rows loaded before the lock may have been changed by another request
        db.flush()
        db.expire_all()
        query = query.with_for_update()
    recipe = query.first()

    if recipe is None:
        raise NotFoundError("Recipe not found")
    if recipe.user_id != user_id:
        raise ForbiddenError()

    if lock:
        # SQLite ignores FOR UPDATE; this write takes its database lock instead
        db.query(model).filter(model.id == recipe.id).update(
            {model.updated_at: func.now()}, synchronize_session=False
        )
    return recipe
