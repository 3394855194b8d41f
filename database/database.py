"""Database helpers: engine, session factory and store initialization.

The engine is built from an explicit `AppConfig` rather than module-level
globals. For SQLite the pysqlite driver's implicit transaction handling is
switched off and every SQLAlchemy transaction emits its own ``BEGIN``, so
DDL inside a transaction (the schema migrations) commits or rolls back
together with the surrounding statements.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from core.config import AppConfig
from core.logger import get_logger

logger = get_logger("database.database")


def _enable_transactional_ddl(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # hand transaction control to SQLAlchemy
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_store_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    SQLite URLs get ``check_same_thread=False`` so FastAPI's worker threads
    can share the pool, plus explicit transaction control.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        _enable_transactional_ddl(engine)
    else:
        engine = create_engine(database_url, pool_pre_ping=True)
    logger.info("Engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory whose objects stay readable after commit."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def engine_from_config(config: AppConfig) -> Engine:
    """Create the store engine described by ``config``.

    The storage directory is created first when the store is a local
    SQLite file under it.
    """
    if config.database_url is None:
        config.ensure_storage_dir()
    return create_store_engine(config.get_database_url())


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """Yield a session inside one transaction.

    Commits when the block finishes and rolls back if it raises, so a
    multi-statement unit of work is never partially visible.
    """
    session = factory()
    try:
        with session.begin():
            yield session
    finally:
        session.close()
