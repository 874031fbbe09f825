"""
Redis Token Store - Redis-backed token cache and blacklist.
"""

import hashlib
import json
import logging
from typing import Optional, List

import redis

from admin_auth.ports.token_store_port import TokenStorePort
from admin_auth.domain.admin import SysAdmin

logger = logging.getLogger(__name__)


class RedisTokenStore(TokenStorePort):
    """
    Redis-backed token storage.

    Cached admins are stored as JSON with automatic expiration (TTL).
    Blacklist entries expire when the token would have expired anyway.
    Supports distributed deployments.

    Keys (token part is a SHA-256 digest):
        {prefix}token:{digest}     -> admin JSON
        {prefix}admin:{admin_id}   -> set of raw tokens
        {prefix}blacklist:{digest} -> "1"
    """

    def __init__(
        self,
        redis_client=None,
        redis_url: str = "redis://localhost:6379/0",
        prefix: str = "admin:auth:",
    ):
        """
        Initialize Redis token store.

        Args:
            redis_client: Redis client instance (decode_responses=True expected)
            redis_url: URL used when no client is given
            prefix: Key prefix
        """
        self._redis = redis_client
        self._redis_url = redis_url
        self._prefix = prefix

    def _get_redis(self):
        """Lazy load Redis client."""
        if self._redis is None:
            self._redis = redis.Redis.from_url(self._redis_url, decode_responses=True)
        return self._redis

    @staticmethod
    def _digest(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def _key(self, token: str) -> str:
        """Generate Redis key for a cached admin."""
        return f"{self._prefix}token:{self._digest(token)}"

    def _admin_key(self, admin_id: int) -> str:
        """Generate Redis set key for an admin's tokens."""
        return f"{self._prefix}admin:{admin_id}"

    def _blacklist_key(self, token: str) -> str:
        return f"{self._prefix}blacklist:{self._digest(token)}"

    def save(self, token: str, admin: SysAdmin, ttl: int) -> None:
        """Cache an admin under a token with TTL."""
        r = self._get_redis()
        admin_key = self._admin_key(admin.id)

        r.setex(self._key(token), ttl, json.dumps(admin.to_dict()))

        # Add to admin's token set; the set lives as long as its newest token
        r.sadd(admin_key, token)
        if r.ttl(admin_key) < ttl:
            r.expire(admin_key, ttl)

    def load(self, token: str) -> Optional[SysAdmin]:
        """Get the cached admin from Redis."""
        data = self._get_redis().get(self._key(token))
        if not data:
            return None

        try:
            return SysAdmin.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError):
            logger.warning("Discarding unreadable cached admin entry")
            return None

    def replace(self, token: str, admin: SysAdmin) -> bool:
        """Overwrite the cached admin, keeping the remaining TTL."""
        r = self._get_redis()
        key = self._key(token)

        ttl = r.ttl(key)
        if ttl is None or ttl <= 0:
            return False

        r.setex(key, ttl, json.dumps(admin.to_dict()))
        return True

    def delete(self, token: str) -> bool:
        """Delete the cached admin for a token."""
        admin = self.load(token)
        if not admin:
            return False

        r = self._get_redis()
        r.delete(self._key(token))
        r.srem(self._admin_key(admin.id), token)
        return True

    def tokens_for_admin(self, admin_id: int) -> List[str]:
        """List live tokens for an admin."""
        r = self._get_redis()
        admin_key = self._admin_key(admin_id)

        tokens = []
        for token in r.smembers(admin_key):
            if r.exists(self._key(token)):
                tokens.append(token)
            else:
                # Clean up expired token from admin set
                r.srem(admin_key, token)

        return tokens

    def blacklist(self, token: str, ttl: int) -> bool:
        """Revoke a token; SET NX so a second revoke reports False."""
        created = self._get_redis().set(self._blacklist_key(token), "1", ex=max(1, ttl), nx=True)
        return bool(created)

    def is_blacklisted(self, token: str) -> bool:
        """Check revocation."""
        return bool(self._get_redis().exists(self._blacklist_key(token)))
