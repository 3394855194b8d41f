"""SQLAlchemy ORM models for the SmartDiet store.

Tables mirror the on-disk schema: health profiles, stored recommendations,
diet history and recipes. The Alembic revisions in `database.migrations`
create them on disk and must be kept in step with these classes. List-
and object-valued fields are stored as JSON-encoded text and timestamps
as ISO 8601 text. The models stay behavior-free; conversion to domain
entities lives in `database.repositories`.

No table declares a foreign key. Diet history rows must be insertable for
users whose profile does not exist yet, and the profile cascade is handled
in application code.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, Text, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class HealthProfileRecord(Base):
    """Row of ``health_profiles``; ``user_id`` is the upsert key."""

    __tablename__ = "health_profiles"
    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, unique=True)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)
    weight = Column(Float, nullable=False)
    height = Column(Float, nullable=False)
    activity_level = Column(String, nullable=False)
    health_goals = Column(Text, nullable=False)
    dietary_preferences = Column(Text, nullable=False)
    dietary_restrictions = Column(Text, nullable=False)
    allergies = Column(Text, nullable=False)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)


class DietRecommendationRecord(Base):
    """Row of ``diet_recommendations``, a stored recommendation snapshot."""

    __tablename__ = "diet_recommendations"
    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    ingredients = Column(Text, nullable=False)
    nutritional_info = Column(Text, nullable=False)
    preparation_time = Column(Integer, nullable=False)
    difficulty_level = Column(String, nullable=False)
    meal_type = Column(String, nullable=False)
    recipe_instructions = Column(Text, nullable=False)
    created_at = Column(String, nullable=False)
    is_personalized = Column(Boolean, nullable=False)
    relevance_score = Column(Float, nullable=False)


class DietHistoryRecord(Base):
    """Row of ``diet_history``; ``date_attempted`` is ``YYYY-MM-DD`` text."""

    __tablename__ = "diet_history"
    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False)
    diet_item_id = Column(String, nullable=False)
    date_attempted = Column(String, nullable=False)
    rating = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    was_prepared = Column(Boolean, nullable=False)
    meal_type = Column(String, nullable=False)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    __table_args__ = (
        Index("ix_diet_history_user_date", "user_id", "date_attempted"),
    )


class RecipeRecord(Base):
    """Row of ``recipes``."""

    __tablename__ = "recipes"
    id = Column(String, primary_key=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    ingredients = Column(Text, nullable=False)
    nutritional_info_per_serving = Column(Text, nullable=False)
    preparation_time = Column(Integer, nullable=False)
    difficulty_level = Column(String, nullable=False)
    meal_type = Column(String, nullable=False)
    recipe_instructions = Column(Text, nullable=False)
    cuisine_type = Column(String, nullable=True)
    seasonal = Column(Boolean, nullable=False)
    tags = Column(Text, nullable=False)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

