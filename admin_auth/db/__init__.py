"""
Persistence - SQLAlchemy models and engine/session factories.
"""

from admin_auth.db.models import Base
from admin_auth.db.database import build_engine, build_session_factory, init_schema

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "init_schema",
]
