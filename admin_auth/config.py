"""
Configuration - settings read from environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEV_SECRET = "dev-secret"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class AuthSettings:
    """
    Runtime settings for the admin auth service.

    token_ttl is both the JWT lifetime and the TTL of the cached admin.
    """
    jwt_secret: str = DEV_SECRET
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "admin-auth"
    token_ttl: int = 7200
    redis_url: Optional[str] = None
    key_prefix: str = "admin:auth:"
    database_url: str = "sqlite:///./admin_auth.db"
    default_admin_username: Optional[str] = None
    default_admin_password: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AuthSettings":
        """Build settings from ADMIN_AUTH_* variables, DATABASE_URL and LOG_LEVEL."""
        secret = os.getenv("ADMIN_AUTH_JWT_SECRET")
        if not secret:
            logger.warning("ADMIN_AUTH_JWT_SECRET not set, using development secret")
            secret = DEV_SECRET

        settings = cls(
            jwt_secret=secret,
            jwt_algorithm=os.getenv("ADMIN_AUTH_JWT_ALGORITHM", "HS256"),
            jwt_issuer=os.getenv("ADMIN_AUTH_JWT_ISSUER", "admin-auth"),
            token_ttl=_int_env("ADMIN_AUTH_TOKEN_TTL", 7200),
            redis_url=os.getenv("ADMIN_AUTH_REDIS_URL") or None,
            key_prefix=os.getenv("ADMIN_AUTH_KEY_PREFIX", "admin:auth:"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./admin_auth.db"),
            default_admin_username=os.getenv("ADMIN_AUTH_DEFAULT_USERNAME") or None,
            default_admin_password=os.getenv("ADMIN_AUTH_DEFAULT_PASSWORD") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        if settings.token_ttl <= 0:
            raise ValueError("ADMIN_AUTH_TOKEN_TTL must be positive")
        return settings
