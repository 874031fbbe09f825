"""
Adapters - Implementations of ports.

Tokens:
- JWTTokenAdapter: JWT signing and verification
- RedisTokenStore: Redis-backed token cache and blacklist
- MemoryTokenStore: In-memory token cache and blacklist (testing)

Persistence:
- SQLAlchemyAdminRepository: Admin accounts, roles and permissions
- SQLAlchemyLoginLogRepository: Login attempt history
"""

# Tokens
from admin_auth.adapters.jwt_tokens import JWTTokenAdapter
from admin_auth.adapters.redis_token_store import RedisTokenStore
from admin_auth.adapters.memory_token_store import MemoryTokenStore

# Persistence
from admin_auth.adapters.sqlalchemy_admin import SQLAlchemyAdminRepository
from admin_auth.adapters.sqlalchemy_login_log import SQLAlchemyLoginLogRepository

__all__ = [
    # Tokens
    "JWTTokenAdapter",
    "RedisTokenStore",
    "MemoryTokenStore",
    # Persistence
    "SQLAlchemyAdminRepository",
    "SQLAlchemyLoginLogRepository",
]
