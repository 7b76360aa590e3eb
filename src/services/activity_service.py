"""User activity: favorites, recently viewed recipes, search history and likes."""

import logging
from datetime import UTC, datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import ExternalServiceError, NotFoundError
from src.models.enums import RecipeSource
from src.models.favorite import UserFavorite
from src.models.recipe import UserRecipe
from src.models.recipe_like import RecipeLike
from src.models.recipe_ref import RecipeRef
from src.models.recipe_view import RecipeView
from src.models.search_history import SearchHistory
from src.services.ownership import require_owner
from src.services.spoonacular import SpoonacularService

logger = logging.getLogger(__name__)


class ActivityService:
    """Per-user activity tracking keyed by recipe references."""

    def __init__(self, db: Session, recent_views_limit: int | None = None):
        self.db = db
        self.recent_views_limit = recent_views_limit or get_settings().recent_views_limit

    # --- Favorites ---

    def add_favorite(self, user_id: int, ref: RecipeRef) -> UserFavorite:
        """Mark a recipe as favorite. Adding it twice keeps a single row."""
        require_owner(self.db, ref, user_id)
        existing = (
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id, UserFavorite.matches(ref))
            .first()
        )
        if existing:
            return existing

        favorite = UserFavorite(
            user_id=user_id, recipe_source=ref.source.value, recipe_id=ref.recipe_id
        )
        self.db.add(favorite)
        self.db.commit()
        self.db.refresh(favorite)
        logger.info(f"User {user_id} added {ref} to favorites")
        return favorite

    def list_favorites(self, user_id: int) -> list[UserFavorite]:
        return (
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id)
            .order_by(UserFavorite.created_at.desc(), UserFavorite.id.desc())
            .all()
        )

    def remove_favorite(self, user_id: int, ref: RecipeRef) -> None:
        deleted = (
            self.db.query(UserFavorite)
            .filter(UserFavorite.user_id == user_id, UserFavorite.matches(ref))
            .delete(synchronize_session="fetch")
        )
        if not deleted:
            raise NotFoundError("Recipe is not in favorites")
        self.db.commit()

    # --- Recently viewed ---

    def record_view(self, user_id: int, ref: RecipeRef) -> RecipeView:
        """Remember that the user opened a recipe.

        A repeated view moves the recipe to the front instead of adding a
        duplicate. Only the newest recent_views_limit views are kept.
        Viewing a personal recipe counts towards its popularity.
        """
        recipe = require_owner(self.db, ref, user_id)

        self.db.query(RecipeView).filter(
            RecipeView.user_id == user_id, RecipeView.matches(ref)
        ).delete(synchronize_session="fetch")
        view = RecipeView(
            user_id=user_id,
            recipe_source=ref.source.value,
            recipe_id=ref.recipe_id,
            viewed_at=datetime.now(UTC),
        )
        self.db.add(view)
        self.db.flush()

        stale = self._views_query(user_id).offset(self.recent_views_limit).all()
        for old in stale:
            self.db.delete(old)

        if ref.source == RecipeSource.PERSONAL:
            self.db.query(UserRecipe).filter(UserRecipe.id == recipe.id).update(
                {UserRecipe.popularity: func.coalesce(UserRecipe.popularity, 0) + 1},
                synchronize_session=False,
            )

        self.db.commit()
        self.db.refresh(view)
        return view

    def _views_query(self, user_id: int):
        return (
            self.db.query(RecipeView)
            .filter(RecipeView.user_id == user_id)
            .order_by(RecipeView.viewed_at.desc(), RecipeView.id.desc())
        )

    def list_recent_views(self, user_id: int) -> list[RecipeView]:
        """The user's most recent views, newest first."""
        return self._views_query(user_id).limit(self.recent_views_limit).all()

    # --- Search history ---

    def save_search(
        self,
        user_id: int,
        query: str,
        cuisine: str | None = None,
        diet: str | None = None,
        intolerance: str | None = None,
        limit: int = 5,
    ) -> SearchHistory:
        """Replace the user's last search."""
        self.db.query(SearchHistory).filter(SearchHistory.user_id == user_id).delete(
            synchronize_session="fetch"
        )
        entry = SearchHistory(
            user_id=user_id,
            search_query=query,
            cuisine_filter=cuisine,
            diet_filter=diet,
            intolerance_filter=intolerance,
            results_limit=limit,
            searched_at=datetime.now(UTC),
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"Saved search {query!r} for user {user_id}")
        return entry

    def get_last_search(self, user_id: int) -> SearchHistory | None:
        return (
            self.db.query(SearchHistory)
            .filter(SearchHistory.user_id == user_id)
            .order_by(SearchHistory.searched_at.desc())
            .first()
        )

    def clear_search_history(self, user_id: int) -> None:
        self.db.query(SearchHistory).filter(SearchHistory.user_id == user_id).delete(
            synchronize_session="fetch"
        )
        self.db.commit()

    # --- Likes ---

    async def like(
        self, user_id: int, ref: RecipeRef, spoonacular: SpoonacularService | None = None
    ) -> int:
        """Add one like and return the new total.

        The counter starts from the recipe's popularity: the local popularity
        column for personal recipes, zero for family recipes and the
        aggregateLikes value for external ones. Increments run in SQL, so
        concurrent likes are never lost.
        """
        recipe = require_owner(self.db, ref, user_id)

        if self._likes_query(ref).first() is None:
            base = await self._initial_likes(ref, recipe, spoonacular)
            self.db.add(
                RecipeLike(
                    recipe_source=ref.source.value, recipe_id=ref.recipe_id, likes_count=base
                )
            )
            try:
                self.db.commit()
            except IntegrityError:
                # A concurrent request created the counter first
                self.db.rollback()

        self._likes_query(ref).update(
            {RecipeLike.likes_count: RecipeLike.likes_count + 1}, synchronize_session=False
        )
        likes = self._likes_query(ref).with_entities(RecipeLike.likes_count).scalar()
        if ref.source == RecipeSource.PERSONAL:
            self.db.query(UserRecipe).filter(UserRecipe.id == ref.recipe_id).update(
                {UserRecipe.popularity: likes}, synchronize_session=False
            )
        self.db.commit()

        logger.info(f"User {user_id} liked {ref}, now {likes} likes")
        return likes

    def _likes_query(self, ref: RecipeRef):
        return self.db.query(RecipeLike).filter(RecipeLike.matches(ref))

    async def _initial_likes(
        self, ref: RecipeRef, recipe, spoonacular: SpoonacularService | None
    ) -> int:
        if ref.source == RecipeSource.PERSONAL:
            return recipe.popularity or 0
        if ref.source == RecipeSource.FAMILY:
            return 0
        if spoonacular is None:
            raise ExternalServiceError("No external recipe source configured", http_status=503)
        # End the read transaction so no connection idles while the API is awaited
        self.db.commit()
        return await spoonacular.get_popularity(ref.recipe_id)

    # --- Recipe deletion ---

    def purge_recipe(self, ref: RecipeRef) -> None:
        """Remove favorites, views and likes of a deleted recipe. Flushes only."""
        for model in (UserFavorite, RecipeView, RecipeLike):
            self.db.query(model).filter(model.matches(ref)).delete(synchronize_session="fetch")
