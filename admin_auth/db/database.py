"""
Database engine and session management.

Builds the SQLAlchemy engine from a URL, with the SQLite settings needed for
in-memory test databases shared across threads.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from admin_auth.db.models import Base


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; in-memory SQLite gets a StaticPool so every connection sees one schema."""
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    """Create missing tables."""
    Base.metadata.create_all(bind=engine)
