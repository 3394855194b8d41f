"""Database package: ORM records, migrations and the persistent store."""

from .database import create_session_factory, create_store_engine, engine_from_config, session_scope
from .migrations import run_migrations
from .store import DietStore, init_store
from . import models

__all__ = [
    "create_session_factory",
    "create_store_engine",
    "engine_from_config",
    "session_scope",
    "run_migrations",
    "DietStore",
    "init_store",
    "models",
]
