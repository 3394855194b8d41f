"""Per-entity repositories and the mapping between rows and domain entities.

Each repository works inside a session owned by the caller and never
commits. Conversion helpers raise ``ValueError`` (malformed JSON, a field
pydantic rejects) or `ParseError` (a bad stored timestamp); the store turns
either into `StorageError`.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from core.repository import BaseRepository
from database.criteria import Criteria, paginate
from database.models import (
    DietHistoryRecord,
    DietRecommendationRecord,
    HealthProfileRecord,
    RecipeRecord,
)
from domain.models import (
    DietHistory,
    DietRecommendation,
    HealthProfile,
    Ingredient,
    NutritionalInfo,
    Recipe,
    RecipeIngredient,
    utc_now,
)
from domain.parsing import parse_date, parse_timestamp, parse_uuid


def dump_json(value: Any) -> str:
    # unescaped so LIKE matching works on any script
    return json.dumps(value, ensure_ascii=False)


def load_json(raw: str) -> Any:
    return json.loads(raw)


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


# -- health profiles ---------------------------------------------------------

def profile_to_row(profile: HealthProfile) -> Dict[str, Any]:
    return {
        "id": str(profile.id),
        "user_id": profile.user_id,
        "age": profile.age,
        "gender": profile.gender,
        "weight": profile.weight,
        "height": profile.height,
        "activity_level": profile.activity_level,
        "health_goals": dump_json(profile.health_goals),
        "dietary_preferences": dump_json(profile.dietary_preferences),
        "dietary_restrictions": dump_json(profile.dietary_restrictions),
        "allergies": dump_json(profile.allergies),
        "created_at": format_timestamp(profile.created_at),
        "updated_at": format_timestamp(profile.updated_at),
    }


def row_to_profile(row: HealthProfileRecord) -> HealthProfile:
    return HealthProfile(
        id=parse_uuid(row.id, "id"),
        user_id=row.user_id,
        age=row.age,
        gender=row.gender,
        weight=row.weight,
        height=row.height,
        activity_level=row.activity_level,
        health_goals=load_json(row.health_goals),
        dietary_preferences=load_json(row.dietary_preferences),
        dietary_restrictions=load_json(row.dietary_restrictions),
        allergies=load_json(row.allergies),
        created_at=parse_timestamp(row.created_at, "created_at"),
        updated_at=parse_timestamp(row.updated_at, "updated_at"),
    )


class ProfileRepository(BaseRepository[HealthProfileRecord]):
    """Health profiles, one row per ``user_id``."""

    def __init__(self, session: Session):
        super().__init__(HealthProfileRecord, session)

    def upsert(self, profile: HealthProfile) -> None:
        """Insert ``profile`` or overwrite the mutable fields of the stored one.

        ``id`` and ``created_at`` of an existing row are left untouched.
        """
        values = profile_to_row(profile)
        values["updated_at"] = format_timestamp(utc_now())
        stmt = sqlite_insert(HealthProfileRecord).values(**values)
        mutable = {
            key: stmt.excluded[key]
            for key in values
            if key not in ("id", "user_id", "created_at")
        }
        self.session.execute(
            stmt.on_conflict_do_update(index_elements=["user_id"], set_=mutable)
        )

    def get_by_user(self, user_id: str) -> Optional[HealthProfileRecord]:
        stmt = select(HealthProfileRecord).where(HealthProfileRecord.user_id == user_id)
        return self.session.scalars(stmt).first()

    def delete_by_user(self, user_id: str) -> int:
        return self.delete_where(HealthProfileRecord.user_id == user_id)


# -- diet history ------------------------------------------------------------

def history_to_row(entry: DietHistory) -> Dict[str, Any]:
    return {
        "id": str(entry.id),
        "user_id": entry.user_id,
        "diet_item_id": str(entry.diet_item_id),
        "date_attempted": entry.date_attempted.isoformat(),
        "rating": entry.rating,
        "notes": entry.notes,
        "was_prepared": entry.was_prepared,
        "meal_type": entry.meal_type,
        "created_at": format_timestamp(entry.created_at),
        "updated_at": format_timestamp(entry.updated_at),
    }


def row_to_history(row: DietHistoryRecord) -> DietHistory:
    return DietHistory(
        id=parse_uuid(row.id, "id"),
        user_id=row.user_id,
        diet_item_id=parse_uuid(row.diet_item_id, "diet_item_id"),
        date_attempted=parse_date(row.date_attempted, "date_attempted"),
        rating=row.rating,
        notes=row.notes,
        was_prepared=bool(row.was_prepared),
        meal_type=row.meal_type,
        created_at=parse_timestamp(row.created_at, "created_at"),
        updated_at=parse_timestamp(row.updated_at, "updated_at"),
    )


class DietHistoryRepository(BaseRepository[DietHistoryRecord]):
    """Diet history entries; ``user_id`` need not have a profile."""

    def __init__(self, session: Session):
        super().__init__(DietHistoryRecord, session)

    def insert(self, entry: DietHistory) -> None:
        self.add(DietHistoryRecord(**history_to_row(entry)))

    def find_matching(self, criteria: Criteria, limit: Optional[int] = None,
                      offset: Optional[int] = None) -> List[DietHistoryRecord]:
        stmt = criteria.apply(select(DietHistoryRecord)).order_by(
            DietHistoryRecord.date_attempted.desc(),
            DietHistoryRecord.created_at.desc(),
        )
        return list(self.session.scalars(paginate(stmt, limit, offset)))

    def count_matching(self, criteria: Criteria) -> int:
        return self.session.execute(criteria.count_statement(DietHistoryRecord)).scalar_one()

    def update_fields(self, entry_id: str, values: Dict[str, Any]) -> int:
        """Write ``values`` plus a fresh ``updated_at``; returns rows matched."""
        values = dict(values, updated_at=format_timestamp(utc_now()))
        result = self.session.execute(
            update(DietHistoryRecord).where(DietHistoryRecord.id == entry_id).values(**values)
        )
        return result.rowcount

    def delete_by_id(self, entry_id: str) -> int:
        return self.delete_where(DietHistoryRecord.id == entry_id)

    def delete_by_user(self, user_id: str) -> int:
        return self.delete_where(DietHistoryRecord.user_id == user_id)


# -- recipes -----------------------------------------------------------------

def recipe_to_row(recipe: Recipe) -> Dict[str, Any]:
    return {
        "id": recipe.id,
        "title": recipe.title,
        "description": recipe.description,
        "ingredients": dump_json([i.model_dump() for i in recipe.ingredients]),
        "nutritional_info_per_serving": dump_json(recipe.nutritional_info_per_serving.model_dump()),
        "preparation_time": recipe.preparation_time,
        "difficulty_level": recipe.difficulty_level,
        "meal_type": recipe.meal_type,
        "recipe_instructions": recipe.recipe_instructions,
        "cuisine_type": recipe.cuisine_type,
        "seasonal": recipe.seasonal,
        "tags": dump_json(recipe.tags),
        "created_at": format_timestamp(recipe.created_at),
        "updated_at": format_timestamp(recipe.updated_at),
    }


def row_to_recipe(row: RecipeRecord) -> Recipe:
    return Recipe(
        id=row.id,
        title=row.title,
        description=row.description or "",
        ingredients=[RecipeIngredient(**i) for i in load_json(row.ingredients)],
        nutritional_info_per_serving=NutritionalInfo(**load_json(row.nutritional_info_per_serving)),
        preparation_time=row.preparation_time,
        difficulty_level=row.difficulty_level,
        meal_type=row.meal_type,
        recipe_instructions=row.recipe_instructions,
        cuisine_type=row.cuisine_type,
        seasonal=bool(row.seasonal),
        tags=load_json(row.tags),
        created_at=parse_timestamp(row.created_at, "created_at"),
        updated_at=parse_timestamp(row.updated_at, "updated_at"),
    )


class RecipeRepository(BaseRepository[RecipeRecord]):

    def __init__(self, session: Session):
        super().__init__(RecipeRecord, session)

    def insert(self, recipe: Recipe) -> None:
        self.add(RecipeRecord(**recipe_to_row(recipe)))

    def search(self, criteria: Criteria, limit: Optional[int] = None,
               offset: Optional[int] = None) -> List[RecipeRecord]:
        stmt = criteria.apply(select(RecipeRecord)).order_by(RecipeRecord.title.asc(), RecipeRecord.id.asc())
        return list(self.session.scalars(paginate(stmt, limit, offset)))

    def existing_ids(self) -> set:
        return set(self.session.scalars(select(RecipeRecord.id)))


# -- recommendations ---------------------------------------------------------

def recommendation_to_row(rec: DietRecommendation) -> Dict[str, Any]:
    return {
        "id": str(rec.id),
        "user_id": rec.user_id,
        "title": rec.title,
        "description": rec.description,
        "ingredients": dump_json([i.model_dump() for i in rec.ingredients]),
        "nutritional_info": dump_json(rec.nutritional_info.model_dump()),
        "preparation_time": rec.preparation_time,
        "difficulty_level": rec.difficulty_level,
        "meal_type": rec.meal_type,
        "recipe_instructions": rec.recipe_instructions,
        "created_at": format_timestamp(rec.created_at),
        "is_personalized": rec.is_personalized,
        "relevance_score": rec.relevance_score,
    }


def row_to_recommendation(row: DietRecommendationRecord) -> DietRecommendation:
    return DietRecommendation(
        id=parse_uuid(row.id, "id"),
        user_id=row.user_id,
        title=row.title,
        description=row.description or "",
        ingredients=[Ingredient(**i) for i in load_json(row.ingredients)],
        nutritional_info=NutritionalInfo(**load_json(row.nutritional_info)),
        preparation_time=row.preparation_time,
        difficulty_level=row.difficulty_level,
        meal_type=row.meal_type,
        recipe_instructions=row.recipe_instructions,
        created_at=parse_timestamp(row.created_at, "created_at"),
        is_personalized=bool(row.is_personalized),
        relevance_score=row.relevance_score,
    )


class RecommendationRepository(BaseRepository[DietRecommendationRecord]):

    def __init__(self, session: Session):
        super().__init__(DietRecommendationRecord, session)

    def insert(self, rec: DietRecommendation) -> None:
        self.add(DietRecommendationRecord(**recommendation_to_row(rec)))

    def list_for_user(self, user_id: str) -> List[DietRecommendationRecord]:
        stmt = (
            select(DietRecommendationRecord)
            .where(DietRecommendationRecord.user_id == user_id)
            .order_by(DietRecommendationRecord.created_at.desc())
        )
        return list(self.session.scalars(stmt))

    def delete_by_user(self, user_id: str) -> int:
        return self.delete_where(DietRecommendationRecord.user_id == user_id)
