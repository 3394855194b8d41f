"""Persistent store facade.

`DietStore` is the only entry point the services and the HTTP layer use to
reach the database. Every public method runs in its own transaction and
translates driver, JSON and row-decoding failures into `StorageError`
carrying the operation name and the entity involved. "Nothing matched" is
reported as None, an empty list or False, never as an error, except where
a missing row is the caller's mistake (`NotFoundError`).
"""

import uuid
from contextlib import contextmanager
from datetime import date
from typing import Dict, Iterator, List, Optional, Union

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from core.config import AppConfig
from core.exceptions import NotFoundError, ParseError, StorageError
from core.logger import get_logger
from database.criteria import diet_history_criteria, recipe_criteria
from database.database import create_session_factory, engine_from_config, session_scope
from database.migrations import run_migrations
from database.repositories import (
    DietHistoryRepository,
    ProfileRepository,
    RecipeRepository,
    RecommendationRepository,
    row_to_history,
    row_to_profile,
    row_to_recipe,
    row_to_recommendation,
)
from domain.models import DietHistory, DietRecommendation, HealthProfile, Recipe, validate_rating

logger = get_logger("database.store")

Identifier = Union[str, uuid.UUID]


class DietStore:
    """Transactional access to profiles, history, recipes and recommendations."""

    def __init__(self, session_factory: sessionmaker, engine: Optional[Engine] = None):
        self.session_factory = session_factory
        self.engine = engine

    @classmethod
    def from_engine(cls, engine: Engine) -> "DietStore":
        return cls(create_session_factory(engine), engine=engine)

    @contextmanager
    def _unit(self, operation: str, entity: str) -> Iterator[Session]:
        """One transaction; storage-level failures surface as StorageError."""
        try:
            with session_scope(self.session_factory) as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("%s on %s failed: %s", operation, entity, exc)
            raise StorageError(f"Database error during {operation}", operation=operation, entity=entity) from exc
        except (ValueError, ParseError) as exc:
            # malformed JSON or a stored value the domain model rejects
            logger.error("%s on %s could not decode a row: %s", operation, entity, exc)
            raise StorageError(f"Corrupt {entity} data during {operation}", operation=operation, entity=entity) from exc

    def dispose(self) -> None:
        if self.engine is not None:
            self.engine.dispose()

    # -- health profiles -----------------------------------------------------

    def save_profile(self, profile: HealthProfile) -> HealthProfile:
        """Insert or update the profile of ``profile.user_id``.

        Returns:
            The stored profile; on update it keeps the original ``id`` and
            ``created_at``.
        """
        profile.validate_fields()
        with self._unit("save_profile", "health_profiles") as session:
            repo = ProfileRepository(session)
            repo.upsert(profile)
            stored = row_to_profile(repo.get_by_user(profile.user_id))
        logger.info("Saved profile for user %s", profile.user_id)
        return stored

    def get_profile(self, user_id: str) -> Optional[HealthProfile]:
        with self._unit("get_profile", "health_profiles") as session:
            row = ProfileRepository(session).get_by_user(user_id)
            return row_to_profile(row) if row is not None else None

    def delete_profile(self, user_id: str) -> Dict[str, int]:
        """Delete a user's history, recommendations and profile together.

        All three deletes commit as one unit; a failure in any of them leaves
        every table unchanged.

        Returns:
            Rows removed per table.
        """
        with self._unit("delete_profile", "health_profiles") as session:
            counts = {
                "diet_history": DietHistoryRepository(session).delete_by_user(user_id),
                "diet_recommendations": RecommendationRepository(session).delete_by_user(user_id),
                "health_profiles": ProfileRepository(session).delete_by_user(user_id),
            }
        logger.info("Deleted data of user %s: %s", user_id, counts)
        return counts

    # -- diet history --------------------------------------------------------

    def log_diet_entry(self, entry: DietHistory) -> DietHistory:
        entry.validate_fields()
        with self._unit("log_diet_entry", "diet_history") as session:
            DietHistoryRepository(session).insert(entry)
        logger.info("Logged diet entry %s for user %s", entry.id, entry.user_id)
        return entry

    def get_diet_history(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        meal_type: Optional[str] = None,
    ) -> List[DietHistory]:
        """Entries of ``user_id`` matching every given filter, newest first."""
        criteria = diet_history_criteria(user_id, start_date, end_date, meal_type)
        with self._unit("get_diet_history", "diet_history") as session:
            rows = DietHistoryRepository(session).find_matching(criteria, limit, offset)
            return [row_to_history(row) for row in rows]

    def get_diet_history_count(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        meal_type: Optional[str] = None,
    ) -> int:
        criteria = diet_history_criteria(user_id, start_date, end_date, meal_type)
        with self._unit("get_diet_history_count", "diet_history") as session:
            return DietHistoryRepository(session).count_matching(criteria)

    def update_diet_entry(
        self,
        entry_id: Identifier,
        rating: Optional[int] = None,
        notes: Optional[str] = None,
        was_prepared: Optional[bool] = None,
    ) -> bool:
        """Write the supplied fields of one entry; ``updated_at`` always moves.

        Returns:
            False when no field was supplied, True otherwise.

        Raises:
            ValidationError: If ``rating`` is outside 1-5.
            NotFoundError: If no entry has ``entry_id``.
        """
        validate_rating(rating)
        values = {}
        if rating is not None:
            values["rating"] = rating
        if notes is not None:
            values["notes"] = notes
        if was_prepared is not None:
            values["was_prepared"] = was_prepared

        with self._unit("update_diet_entry", "diet_history") as session:
            matched = DietHistoryRepository(session).update_fields(str(entry_id), values)
        if matched == 0:
            raise NotFoundError("Diet history entry", str(entry_id))
        return bool(values)

    def delete_diet_entry(self, entry_id: Identifier) -> None:
        with self._unit("delete_diet_entry", "diet_history") as session:
            deleted = DietHistoryRepository(session).delete_by_id(str(entry_id))
        if deleted == 0:
            raise NotFoundError("Diet history entry", str(entry_id))
        logger.info("Deleted diet entry %s", entry_id)

    # -- recipes -------------------------------------------------------------

    def save_recipe(self, recipe: Recipe) -> Recipe:
        recipe.validate_fields()
        with self._unit("save_recipe", "recipes") as session:
            RecipeRepository(session).insert(recipe)
        return recipe

    def save_recipes(self, recipes: List[Recipe]) -> int:
        """Insert the recipes whose id is not stored yet; returns how many were added."""
        for recipe in recipes:
            recipe.validate_fields()
        with self._unit("save_recipes", "recipes") as session:
            repo = RecipeRepository(session)
            known = repo.existing_ids()
            added = 0
            for recipe in recipes:
                if recipe.id in known:
                    continue
                repo.insert(recipe)
                known.add(recipe.id)
                added += 1
        return added

    def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        with self._unit("get_recipe_by_id", "recipes") as session:
            row = RecipeRepository(session).get_by_id(recipe_id)
            return row_to_recipe(row) if row is not None else None

    def search_recipes(
        self,
        query: Optional[str] = None,
        tags: Optional[List[str]] = None,
        exclude_ingredients: Optional[List[str]] = None,
        max_preparation_time: Optional[int] = None,
        difficulty_level: Optional[str] = None,
        meal_type: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Recipe]:
        """Recipes matching every given filter, ordered by title."""
        criteria = recipe_criteria(query, tags, exclude_ingredients, max_preparation_time,
                                   difficulty_level, meal_type)
        with self._unit("search_recipes", "recipes") as session:
            rows = RecipeRepository(session).search(criteria, limit, offset)
            return [row_to_recipe(row) for row in rows]

    # -- recommendations -----------------------------------------------------

    def save_recommendation(self, rec: DietRecommendation) -> DietRecommendation:
        rec.validate_fields()
        with self._unit("save_recommendation", "diet_recommendations") as session:
            RecommendationRepository(session).insert(rec)
        return rec

    def save_recommendations(self, recs: List[DietRecommendation]) -> int:
        """Store a batch of recommendations; all of them or none are written."""
        for rec in recs:
            rec.validate_fields()
        with self._unit("save_recommendations", "diet_recommendations") as session:
            repo = RecommendationRepository(session)
            for rec in recs:
                repo.insert(rec)
        logger.info("Saved %s recommendations", len(recs))
        return len(recs)

    def get_recommendation_by_id(self, rec_id: Identifier) -> Optional[DietRecommendation]:
        with self._unit("get_recommendation_by_id", "diet_recommendations") as session:
            row = RecommendationRepository(session).get_by_id(str(rec_id))
            return row_to_recommendation(row) if row is not None else None

    def list_recommendations(self, user_id: str) -> List[DietRecommendation]:
        with self._unit("list_recommendations", "diet_recommendations") as session:
            rows = RecommendationRepository(session).list_for_user(user_id)
            return [row_to_recommendation(row) for row in rows]


def init_store(config: AppConfig) -> DietStore:
    """Open the configured database and bring its schema up to date.

    Migrations finish before the store is returned, so no query ever runs
    against an old schema.

    Raises:
        StorageError: If a migration fails.
    """
    engine = engine_from_config(config)
    try:
        applied = run_migrations(engine)
    except StorageError:
        engine.dispose()
        raise
    if applied:
        logger.info("Applied migrations %s", applied)
    return DietStore.from_engine(engine)
