"""Tests for the progress store."""

from src.models.recipe_ref import RecipeRef
from src.services.progress_store import ProgressStore


def state(store, user_id, ref):
    return [(e.step_number, e.is_completed) for e in store.list_entries(user_id, ref)]


def test_initialize_creates_incomplete_entry(db, user):
    store = ProgressStore(db)
    ref = RecipeRef.personal(1)

    entry = store.initialize(user.id, ref, 1)

    assert entry.is_completed is False
    assert entry.completed_at is None
    assert state(store, user.id, ref) == [(1, False)]


def test_complete_and_uncomplete_round_trip(db, user):
    store = ProgressStore(db)
    ref = RecipeRef.family(7)
    store.initialize(user.id, ref, 1)

    assert store.complete(user.id, ref, 1) == 1
    entry = store.list_entries(user.id, ref)[0]
    assert entry.is_completed is True
    assert entry.completed_at is not None

    assert store.uncomplete(user.id, ref, 1) == 1
    entry = store.list_entries(user.id, ref)[0]
    assert entry.is_completed is False
    assert entry.completed_at is None


def test_complete_is_idempotent(db, user):
    """Completing twice keeps the first timestamp."""
    store = ProgressStore(db)
    ref = RecipeRef.personal(1)
    store.initialize(user.id, ref, 1)

    store.complete(user.id, ref, 1)
    first_completed_at = store.list_entries(user.id, ref)[0].completed_at

    assert store.complete(user.id, ref, 1) == 0
    assert store.list_entries(user.id, ref)[0].completed_at == first_completed_at


def test_toggle_missing_entry_is_noop(db, user):
    store = ProgressStore(db)
    ref = RecipeRef.personal(1)

    assert store.complete(user.id, ref, 5) == 0
    assert store.uncomplete(user.id, ref, 5) == 0
    assert store.list_entries(user.id, ref) == []


def test_shifts_apply_to_every_user(db, user, other_user):
    store = ProgressStore(db)
    ref = RecipeRef.personal(1)
    for uid in (user.id, other_user.id):
        for number in (1, 2, 3):
            store.initialize(uid, ref, number)
    store.complete(other_user.id, ref, 2)

    store.shift_forward(ref, 2)

    assert state(store, user.id, ref) == [(1, False), (3, False), (4, False)]
    assert state(store, other_user.id, ref) == [(1, False), (3, True), (4, False)]

    store.shift_backward(ref, 1)

    assert state(store, other_user.id, ref) == [(1, False), (2, False), (3, True)]


def test_delete_number_removes_every_users_entry(db, user, other_user):
    store = ProgressStore(db)
    ref = RecipeRef.personal(1)
    for uid in (user.id, other_user.id):
        store.initialize(uid, ref, 1)
        store.initialize(uid, ref, 2)

    assert store.delete_number(ref, 1) == 2
    assert state(store, user.id, ref) == [(2, False)]
    assert state(store, other_user.id, ref) == [(2, False)]


def test_reset_only_touches_one_user(db, user, other_user):
    store = ProgressStore(db)
    ref = RecipeRef.personal(1)
    for uid in (user.id, other_user.id):
        store.initialize(uid, ref, 1)

    assert store.reset(user.id, ref) == 1
    assert store.list_entries(user.id, ref) == []
    assert state(store, other_user.id, ref) == [(1, False)]


def test_delete_all(db, user, other_user):
    store = ProgressStore(db)
    ref = RecipeRef.external(555)
    store.initialize(user.id, ref, 1)
    store.initialize(other_user.id, ref, 1)

    assert store.delete_all(ref) == 2
