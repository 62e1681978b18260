"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration, falling back to
an in-memory SQLite database when no server is configured.
"""
import os
from functools import lru_cache
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def get_database_url() -> str:
    """Return DATABASE_URL, a URL built from POSTGRES_* variables, or in-memory SQLite."""
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    components = {
        "POSTGRES_USER": os.getenv("POSTGRES_USER"),
        "POSTGRES_PASSWORD": os.getenv("POSTGRES_PASSWORD"),
        "POSTGRES_HOST": os.getenv("POSTGRES_HOST"),
        "POSTGRES_PORT": os.getenv("POSTGRES_PORT"),
        "POSTGRES_DB": os.getenv("POSTGRES_DB"),
    }
    if not any(components.values()):
        return SQLITE_MEMORY_URL

    missing = [name for name, value in components.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return (
        f"postgresql://{components['POSTGRES_USER']}:{components['POSTGRES_PASSWORD']}"
        f"@{components['POSTGRES_HOST']}:{components['POSTGRES_PORT']}/{components['POSTGRES_DB']}"
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # pragma: no cover - driver hook
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: Optional[str] = None) -> Engine:
    """Create an engine for ``url`` (default: :func:`get_database_url`).

    SQLite connections get foreign key enforcement so that cascades and
    reference checks behave as on PostgreSQL. In-memory SQLite uses a
    StaticPool so every session sees the same database.
    """
    url = url or get_database_url()
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
        eng = create_engine(url, **kwargs)
        event.listen(eng, "connect", _enable_sqlite_foreign_keys)
        return eng
    return create_engine(url)


def init_schema(eng: Engine) -> None:
    """Create all tables that do not exist yet."""
    from scouts.db import models  # local import keeps engine setup free of ORM imports

    models.Base.metadata.create_all(bind=eng)


def make_session_factory(eng: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=eng)


@lru_cache(maxsize=None)
def get_engine() -> Engine:
    """Return the process-wide engine, creating the schema on first use."""
    eng = create_db_engine()
    init_schema(eng)
    return eng


def reset_engine_cache() -> None:
    """Dispose of the cached engine (useful for tests that change DATABASE_URL)."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()


def get_db() -> Iterator[Session]:
    """Yield a database session and close it when the caller is done."""
    db = make_session_factory(get_engine())()
    try:
        yield db
    finally:
        db.close()
