"""Database configuration and session management."""

import json
from collections.abc import Generator

from sqlalchemy import Engine, Text, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.types import TypeDecorator

from emploirapide.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


class JSONText(TypeDecorator):
    """JSON value stored as TEXT.

    Encoding happens on bind and decoding on load, so callers only ever see
    lists and dicts.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value, ensure_ascii=False)

    def process_result_value(self, value, dialect):
        if value is None or value == "":
            return None
        return json.loads(value)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(engine: Engine) -> None:
    """Replace SQLite's ASCII-only lower() so ilike folds accented capitals."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


# Create engine lazily to allow testing without database
_engine = None
_SessionLocal = None


def get_engine():
    """Get or create database engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        if not settings.database_url:
            raise ValueError("DATABASE_URL not configured")
        kwargs = {"pool_pre_ping": True}
        if settings.database_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            kwargs["pool_recycle"] = 300  # Recycle connections after 5 minutes
        _engine = create_engine(settings.database_url, **kwargs)
        if _engine.dialect.name == "sqlite":
            register_sqlite_functions(_engine)
    return _engine


def get_session_factory():
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    from emploirapide.db import tables  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
