"""
database/migrations/versions/002_drop_diet_history_foreign_key.py

Rebuild ``diet_history`` without the foreign key of older schemas.

Older releases tied ``diet_history.user_id`` to ``health_profiles``, which
rejected entries logged before a profile existed. SQLite cannot drop a
constraint in place, so batch mode recreates the table from the column
list below, copies every row across, drops the old table, renames the new
one and recreates the index. The constraint was never named, so the table
definition is given explicitly instead of dropping it by name.
Databases without the constraint are left untouched.
"""

from alembic import op
import sqlalchemy as sa

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None

diet_history = sa.Table(
    "diet_history",
    sa.MetaData(),
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
    sa.Index("ix_diet_history_user_date", "user_id", "date_attempted"),
)


def upgrade() -> None:
    if not sa.inspect(op.get_bind()).get_foreign_keys("diet_history"):
        return
    with op.batch_alter_table("diet_history", recreate="always", copy_from=diet_history):
        pass


def downgrade() -> None:
    # the foreign key is not restored
    pass
