"""Alembic schema migrations.

Revisions live in ``versions/`` and are applied by `run_migrations` at
startup, before the store serves any query. Each revision runs in its own
transaction together with its ``alembic_version`` update, so a failing
revision leaves the schema at the last one that succeeded. A failure
raises `StorageError` and startup must not continue.

No ``alembic.ini`` is shipped; `alembic_config` builds the configuration
in code so the revisions travel with the installed package.
"""

import os
from pathlib import Path
from typing import List, Optional, Sequence

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.util import CommandError
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import StorageError
from core.logger import get_logger

logger = get_logger("database.migrations")

MIGRATIONS_DIR = Path(__file__).resolve().parent
VERSIONS_DIR = MIGRATIONS_DIR / "versions"


def alembic_config(connection: Optional[Connection] = None,
                   version_locations: Sequence[os.PathLike] = ()) -> Config:
    """Alembic configuration for this package, without an ini file.

    Args:
        connection: Open connection handed to ``env.py``; migrations run on it.
        version_locations: Extra revision directories, searched after ``versions/``.
    """
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    locations = [str(VERSIONS_DIR)] + [str(p) for p in version_locations]
    cfg.set_main_option("path_separator", "os")
    cfg.set_main_option("version_path_separator", "os")
    cfg.set_main_option("version_locations", os.pathsep.join(locations))
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg


def current_revision(engine: Engine) -> Optional[str]:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def run_migrations(engine: Engine, version_locations: Sequence[os.PathLike] = ()) -> List[str]:
    """Upgrade the database behind ``engine`` to the newest revision.

    Returns:
        The revisions applied by this call (empty when already up to date).

    Raises:
        StorageError: If a revision fails. Earlier revisions stay applied;
            the failing one is rolled back.
    """
    with engine.connect() as conn:
        cfg = alembic_config(conn, version_locations)
        applied: List[str] = cfg.attributes.setdefault("applied_revisions", [])
        try:
            command.upgrade(cfg, "head")
        except (SQLAlchemyError, CommandError) as exc:
            logger.error("Schema migration failed after %s: %s", applied or "no revision", exc)
            raise StorageError(f"Schema migration failed: {exc}", operation="migrate",
                               entity="schema") from exc
    return list(applied)
