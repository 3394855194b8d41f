"""
database/migrations/env.py

Alembic migration environment.

The app calls `database.migrations.run_migrations`, which hands an open
connection over in ``config.attributes["connection"]``. From a shell the
database URL comes from ``-x url=...``, ``sqlalchemy.url`` or
``SMART_DIET_DATABASE_URL``.
"""

import os

from alembic import context

from database.database import create_store_engine
from database.models import Base

config = context.config
target_metadata = Base.metadata


def _database_url() -> str:
    url = (context.get_x_argument(as_dictionary=True).get("url")
           or config.get_main_option("sqlalchemy.url")
           or os.getenv("SMART_DIET_DATABASE_URL"))
    if not url:
        raise RuntimeError("No database URL: pass -x url=... or set SMART_DIET_DATABASE_URL")
    return url


def _record_applied(ctx, step, heads, run_args) -> None:
    config.attributes.setdefault("applied_revisions", []).append(step.up_revision_id)


def _configure(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # DDL is transactional on every supported backend (see database.database)
        transactional_ddl=True,
        transaction_per_migration=True,
        render_as_batch=True,
        on_version_apply=_record_applied,
    )


# ── Offline mode (generates SQL without connecting) ───────────────────────────

def run_migrations_offline() -> None:
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


# ── Online mode (connects and applies migrations) ─────────────────────────────

def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        _configure(connection)
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = create_store_engine(_database_url())
    try:
        with engine.connect() as connection:
            _configure(connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
