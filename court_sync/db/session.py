"""
Case Store Connections
======================

Engine and session handling for the case store. PostgreSQL in production,
SQLite for local runs and tests.

The engine follows `DATABASE_URL` at call time: changing the variable (as the
tests do) and calling `reset_engine()` points every new session at the new
database.
"""

import logging
import os
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from ..config import get_settings
from .models import Base

logger = logging.getLogger(__name__)

_engine = None
_engine_url = None

SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def _database_url() -> str:
    return os.environ.get("DATABASE_URL", get_settings().database_url)


def _enable_sqlite_savepoints(engine: Engine) -> None:
    """
    pysqlite opens transactions on its own and breaks SAVEPOINT nesting.
    Turn that off and let SQLAlchemy emit BEGIN, so each collection
    replacement can roll back alone.
    """
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def _build_engine(database_url: str) -> Engine:
    echo = get_settings().sql_echo
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False}, echo=echo)
        _enable_sqlite_savepoints(engine)
    else:
        engine = create_engine(database_url, pool_size=5, max_overflow=10, pool_pre_ping=True, echo=echo)
    logger.debug(f"Case store engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def get_engine() -> Engine:
    """Engine for the current DATABASE_URL, rebuilt when the URL changes"""
    global _engine, _engine_url
    database_url = _database_url()
    if _engine is None or _engine_url != database_url:
        _engine = _build_engine(database_url)
        _engine_url = database_url
        SessionLocal.configure(bind=_engine)
    return _engine


def reset_engine():
    """Dispose the engine and unbind sessions (tests switch databases this way)"""
    global _engine, _engine_url
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _engine_url = None
    SessionLocal.configure(bind=None)


def init_db():
    """Create the cases table and every child collection table"""
    Base.metadata.create_all(bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency. The endpoint commits; the session is closed here.
    """
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Session for jobs and scripts: commits on success, rolls back on error.

    Usage:
        with get_db_session() as db:
            ingest_case(SQLAlchemyCaseStore(db), case_id, payload)
    """
    get_engine()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
