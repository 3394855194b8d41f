"""
database/migrations/versions/001_initial_schema.py

Initial migration: creates all tables.

Databases written before migrations were tracked already hold some of
these tables; existing tables are left as they are.
"""

from alembic import op
import sqlalchemy as sa

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _missing(name: str) -> bool:
    return not sa.inspect(op.get_bind()).has_table(name)


def upgrade() -> None:

    # ── health_profiles ───────────────────────────────────────────────────────
    if _missing("health_profiles"):
        op.create_table(
            "health_profiles",
            sa.Column("id",                   sa.String,  primary_key=True),
            sa.Column("user_id",              sa.String,  nullable=False, unique=True),
            sa.Column("age",                  sa.Integer, nullable=False),
            sa.Column("gender",               sa.String,  nullable=False),
            sa.Column("weight",               sa.Float,   nullable=False),
            sa.Column("height",               sa.Float,   nullable=False),
            sa.Column("activity_level",       sa.String,  nullable=False),
            sa.Column("health_goals",         sa.Text,    nullable=False),
            sa.Column("dietary_preferences",  sa.Text,    nullable=False),
            sa.Column("dietary_restrictions", sa.Text,    nullable=False),
            sa.Column("allergies",            sa.Text,    nullable=False),
            sa.Column("created_at",           sa.String,  nullable=False),
            sa.Column("updated_at",           sa.String,  nullable=False),
        )

    # ── diet_recommendations ──────────────────────────────────────────────────
    if _missing("diet_recommendations"):
        op.create_table(
            "diet_recommendations",
            sa.Column("id",                  sa.String,  primary_key=True),
            sa.Column("user_id",             sa.String,  nullable=False),
            sa.Column("title",               sa.String,  nullable=False),
            sa.Column("description",         sa.Text,    nullable=True),
            sa.Column("ingredients",         sa.Text,    nullable=False),
            sa.Column("nutritional_info",    sa.Text,    nullable=False),
            sa.Column("preparation_time",    sa.Integer, nullable=False),
            sa.Column("difficulty_level",    sa.String,  nullable=False),
            sa.Column("meal_type",           sa.String,  nullable=False),
            sa.Column("recipe_instructions", sa.Text,    nullable=False),
            sa.Column("created_at",          sa.String,  nullable=False),
            sa.Column("is_personalized",     sa.Boolean, nullable=False),
            sa.Column("relevance_score",     sa.Float,   nullable=False),
        )
        op.create_index("ix_diet_recommendations_user_id", "diet_recommendations", ["user_id"])

    # ── diet_history ──────────────────────────────────────────────────────────
    if _missing("diet_history"):
        op.create_table(
            "diet_history",
            sa.Column("id",             sa.String,  primary_key=True),
            sa.Column("user_id",        sa.String,  nullable=False),
            sa.Column("diet_item_id",   sa.String,  nullable=False),
            sa.Column("date_attempted", sa.String,  nullable=False),
            sa.Column("rating",         sa.Integer, nullable=True),
            sa.Column("notes",          sa.Text,    nullable=True),
            sa.Column("was_prepared",   sa.Boolean, nullable=False),
            sa.Column("meal_type",      sa.String,  nullable=False),
            sa.Column("created_at",     sa.String,  nullable=False),
            sa.Column("updated_at",     sa.String,  nullable=False),
        )
        op.create_index("ix_diet_history_user_date", "diet_history", ["user_id", "date_attempted"])

    # ── recipes ───────────────────────────────────────────────────────────────
    if _missing("recipes"):
        op.create_table(
            "recipes",
            sa.Column("id",                           sa.String,  primary_key=True),
            sa.Column("title",                        sa.String,  nullable=False),
            sa.Column("description",                  sa.Text,    nullable=True),
            sa.Column("ingredients",                  sa.Text,    nullable=False),
            sa.Column("nutritional_info_per_serving", sa.Text,    nullable=False),
            sa.Column("preparation_time",             sa.Integer, nullable=False),
            sa.Column("difficulty_level",             sa.String,  nullable=False),
            sa.Column("meal_type",                    sa.String,  nullable=False),
            sa.Column("recipe_instructions",          sa.Text,    nullable=False),
            sa.Column("cuisine_type",                 sa.String,  nullable=True),
            sa.Column("seasonal",                     sa.Boolean, nullable=False),
            sa.Column("tags",                         sa.Text,    nullable=False),
            sa.Column("created_at",                   sa.String,  nullable=False),
            sa.Column("updated_at",                   sa.String,  nullable=False),
        )
        op.create_index("ix_recipes_title", "recipes", ["title"])


def downgrade() -> None:
    op.drop_table("recipes")
    op.drop_table("diet_history")
    op.drop_table("diet_recommendations")
    op.drop_table("health_profiles")
