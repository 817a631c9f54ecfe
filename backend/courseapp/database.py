"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` and provides small helpers used by the
application, the seed script and tests. By default the database is a
SQLite file next to the package (`backend/courseapp.db`).
"""

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from .config import settings

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _engine_options(url: str) -> dict:
    """Return `create_engine` keyword arguments suited to `url`.

    SQLite connections are shared with FastAPI's worker threads, so the
    same-thread check is disabled. An in-memory database only exists
    for the lifetime of its connection, hence the static pool.
    """
    if not url.startswith("sqlite"):
        return {}
    options = {"connect_args": {"check_same_thread": False}}
    if url in _IN_MEMORY_URLS:
        options["poolclass"] = StaticPool
    return options


engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_options(settings.DATABASE_URL))


def create_db_and_tables():
    """Create database tables using SQLModel metadata.

    Intended for local development and lightweight scripts; production
    deployments should rely on a proper migration tool (alembic) instead.
    """
    # table classes register themselves on import
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(engine)


def drop_db_and_tables():
    """Drop every table known to the metadata. Used by the test suite."""
    SQLModel.metadata.drop_all(engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
