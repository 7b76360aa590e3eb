"""Tests for recipe ownership checks."""

import pytest

from src.exceptions import ForbiddenError, NotFoundError
from src.models.recipe_ref import RecipeRef
from src.services.ownership import is_owned_by, require_owner


def test_owner_owns_personal_and_family(db, user, make_recipe):
    personal = make_recipe(user, ["Boil"])
    family = make_recipe(user, ["Stir"], family=True)

    assert is_owned_by(db, personal.recipe_ref, user.id)
    assert is_owned_by(db, family.recipe_ref, user.id)


def test_other_user_does_not_own(db, user, other_user, make_recipe):
    recipe = make_recipe(user, ["Boil"])

    assert not is_owned_by(db, recipe.recipe_ref, other_user.id)


def test_ids_are_scoped_by_source(db, user, make_recipe):
    recipe = make_recipe(user, ["Boil"])

    assert not is_owned_by(db, RecipeRef.family(recipe.id), user.id)


def test_missing_recipe_is_not_owned(db, user):
    assert not is_owned_by(db, RecipeRef.personal(999), user.id)


def test_external_recipes_are_open_to_everyone(db, user):
    ref = RecipeRef.external(716429)

    assert ref.is_external
    assert is_owned_by(db, ref, user.id)
    assert require_owner(db, ref, user.id) is None


def test_require_owner_errors(db, user, other_user, make_recipe):
    recipe = make_recipe(user, ["Boil"])

    with pytest.raises(ForbiddenError):
        require_owner(db, recipe.recipe_ref, other_user.id)
    with pytest.raises(NotFoundError):
        require_owner(db, RecipeRef.personal(999), user.id)


def test_require_owner_with_lock_returns_recipe(db, user, make_recipe):
    recipe = make_recipe(user, ["Boil"])

    locked = require_owner(db, recipe.recipe_ref, user.id, lock=True)

    assert locked.id == recipe.id
    db.rollback()
