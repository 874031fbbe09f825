"""
FastAPI app assembly: service wiring, exception handlers and routers.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI

from admin_auth import __version__
from admin_auth.config import AuthSettings
from admin_auth.adapters.jwt_tokens import JWTTokenAdapter
from admin_auth.adapters.memory_token_store import MemoryTokenStore
from admin_auth.adapters.redis_token_store import RedisTokenStore
from admin_auth.adapters.sqlalchemy_admin import SQLAlchemyAdminRepository
from admin_auth.adapters.sqlalchemy_login_log import SQLAlchemyLoginLogRepository
from admin_auth.db.database import build_engine, build_session_factory, init_schema
from admin_auth.ports.token_store_port import TokenStorePort
from admin_auth.services.token_service import TokenService
from admin_auth.services.admin_service import AdminService
from admin_auth.services.login_log_service import LoginLogService
from admin_auth.api.errors import register_exception_handlers
from admin_auth.api.routes import router as auth_router

logger = logging.getLogger(__name__)


@dataclass
class AuthContainer:
    """Services shared by every request."""
    settings: AuthSettings
    tokens: TokenService
    admins: AdminService
    login_logs: LoginLogService


def build_container(settings: AuthSettings, token_store: Optional[TokenStorePort] = None) -> AuthContainer:
    """
    Wire adapters and services from settings.

    Args:
        settings: Runtime settings
        token_store: Store override; defaults to Redis when redis_url is set,
            otherwise the in-memory store
    """
    engine = build_engine(settings.database_url)
    init_schema(engine)
    session_factory = build_session_factory(engine)

    if token_store is None:
        if settings.redis_url:
            token_store = RedisTokenStore(redis_url=settings.redis_url, prefix=settings.key_prefix)
        else:
            logger.warning("ADMIN_AUTH_REDIS_URL not set, tokens are kept in process memory")
            token_store = MemoryTokenStore()

    codec = JWTTokenAdapter(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
    )
    tokens = TokenService(codec=codec, store=token_store, token_ttl=settings.token_ttl)
    login_logs = LoginLogService(SQLAlchemyLoginLogRepository(session_factory))
    admins = AdminService(SQLAlchemyAdminRepository(session_factory), tokens, login_logs)

    return AuthContainer(settings=settings, tokens=tokens, admins=admins, login_logs=login_logs)


def create_app(
    settings: Optional[AuthSettings] = None,
    token_store: Optional[TokenStorePort] = None,
) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or AuthSettings.from_env()

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    logger.info("app_startup: log_level=%s", settings.log_level)

    container = build_container(settings, token_store=token_store)
    container.admins.ensure_default_admin(
        settings.default_admin_username,
        settings.default_admin_password,
    )

    app = FastAPI(
        title="Admin Auth Service",
        description="Administrator login, token lifecycle and login log API.",
        version=__version__,
    )
    app.state.container = container

    register_exception_handlers(app)
    app.include_router(auth_router)
    return app
