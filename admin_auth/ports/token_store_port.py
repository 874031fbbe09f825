"""
Token Store Port - Interface for cached sessions and the token blacklist.

Implementations:
- RedisTokenStore: Redis-backed store (production)
- MemoryTokenStore: In-memory store (testing only)
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from admin_auth.domain.admin import SysAdmin


class TokenStorePort(ABC):
    """Port: Cache admin state per token and track revoked tokens."""

    @abstractmethod
    def save(self, token: str, admin: SysAdmin, ttl: int) -> None:
        """
        Cache an admin under a token.

        Args:
            token: Issued token
            admin: Admin to cache
            ttl: Time-to-live in seconds
        """
        pass

    @abstractmethod
    def load(self, token: str) -> Optional[SysAdmin]:
        """
        Get the admin cached under a token.

        Args:
            token: Token

        Returns:
            Cached admin, None if missing or expired
        """
        pass

    @abstractmethod
    def replace(self, token: str, admin: SysAdmin) -> bool:
        """
        Overwrite the cached admin, keeping the remaining TTL.

        Args:
            token: Token
            admin: Updated admin

        Returns:
            True if replaced, False if no entry exists
        """
        pass

    @abstractmethod
    def delete(self, token: str) -> bool:
        """
        Remove the cached admin for a token.

        Args:
            token: Token

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    def tokens_for_admin(self, admin_id: int) -> List[str]:
        """
        List live tokens issued to an admin.

        Args:
            admin_id: Admin ID

        Returns:
            Tokens with a cache entry
        """
        pass

    @abstractmethod
    def blacklist(self, token: str, ttl: int) -> bool:
        """
        Revoke a token until it would have expired anyway.

        Args:
            token: Token to revoke
            ttl: Seconds to keep the blacklist entry

        Returns:
            True if newly blacklisted, False if already blacklisted
        """
        pass

    @abstractmethod
    def is_blacklisted(self, token: str) -> bool:
        """
        Check whether a token was revoked.

        Args:
            token: Token

        Returns:
            True if revoked
        """
        pass
