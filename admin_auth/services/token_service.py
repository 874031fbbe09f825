"""
Token Service - Issue, validate, refresh and revoke admin tokens.

Verification is split in two: the codec checks signature and expiry
(stateless), the store answers "was this revoked?" and "is the session
still cached?" (stateful).
"""

import logging
from typing import Optional

from admin_auth.ports.token_codec_port import TokenCodecPort
from admin_auth.ports.token_store_port import TokenStorePort
from admin_auth.domain.admin import SysAdmin
from admin_auth.exceptions import TokenInvalidError, TokenExpiredError

logger = logging.getLogger(__name__)


class TokenService:
    """
    Token lifecycle on top of a codec and a store.

    Example:
        tokens = TokenService(
            codec=JWTTokenAdapter(secret="secret"),
            store=MemoryTokenStore(),
            token_ttl=7200,
        )

        token = tokens.issue_token(admin)
        admin = tokens.validate(token)
        new_token = tokens.refresh_token(token)
    """

    def __init__(self, codec: TokenCodecPort, store: TokenStorePort, token_ttl: int = 7200):
        """
        Initialize token service.

        Args:
            codec: Token signer/verifier
            store: Cached admin state and blacklist
            token_ttl: Token lifetime and cache TTL in seconds
        """
        self._codec = codec
        self._store = store
        self._token_ttl = token_ttl

    @property
    def token_ttl(self) -> int:
        return self._token_ttl

    def get_token_from_header(self, auth_header: Optional[str]) -> Optional[str]:
        return self._codec.get_token_from_header(auth_header)

    def issue_token(self, admin: SysAdmin) -> str:
        """
        Sign a token and cache the admin under it.

        Args:
            admin: Admin with roles/permissions already loaded

        Returns:
            Token string
        """
        token = self._codec.create_token(admin, expires_in=self._token_ttl)
        self._store.save(token, admin, self._token_ttl)
        return token

    def validate(self, token: str) -> SysAdmin:
        """
        Fully validate a token.

        Args:
            token: Bearer token

        Returns:
            Cached admin

        Raises:
            TokenInvalidError: Bad signature or revoked token
            TokenExpiredError: Expired token or cached session gone
        """
        self._codec.decode(token)

        if self._store.is_blacklisted(token):
            raise TokenInvalidError("Token has been revoked")

        admin = self._store.load(token)
        if admin is None:
            raise TokenExpiredError("Session expired, please log in again")

        return admin

    def get_admin_from_token(self, token: str) -> Optional[SysAdmin]:
        """
        Get the cached admin for a token.

        Returns:
            Admin, None if revoked or no longer cached
        """
        if not token or self._store.is_blacklisted(token):
            return None
        return self._store.load(token)

    def get_username_from_token(self, token: str) -> Optional[str]:
        """Username claim, readable even after expiry."""
        try:
            return self._codec.decode(token, verify_exp=False).username
        except TokenInvalidError:
            return None

    def get_user_id_from_token(self, token: str) -> Optional[int]:
        """Admin id claim of a valid, unexpired token."""
        try:
            return self._codec.decode(token).admin_id
        except (TokenInvalidError, TokenExpiredError):
            return None

    def add_to_blacklist(self, token: str) -> bool:
        """
        Revoke a token for the rest of its lifetime.

        Only tokens we signed are recorded; the entry lives until the token
        would have expired anyway, at least one second.

        Returns:
            True if newly revoked, False if already revoked or not ours
        """
        try:
            claims = self._codec.decode(token, verify_exp=False)
        except TokenInvalidError:
            return False
        return self._store.blacklist(token, max(1, claims.remaining_seconds()))

    def delete_token(self, token: str) -> bool:
        """Drop the cached admin for a token."""
        return self._store.delete(token)

    def revoke(self, token: str) -> bool:
        """
        Log a token out: blacklist it and drop its cached admin.

        Returns:
            True if the token was ours and newly revoked
        """
        revoked = self.add_to_blacklist(token)
        self.delete_token(token)
        return revoked

    def is_blacklisted(self, token: str) -> bool:
        return self._store.is_blacklisted(token)

    def refresh_token(self, token: str) -> Optional[str]:
        """
        Exchange a live token for a new one.

        The old token is claimed (blacklisted) before the new one is issued,
        so of concurrent refreshes of one token only the first succeeds and a
        refresh chain has one live token.

        Args:
            token: Current token

        Returns:
            New token, None if the current one is expired, revoked or uncached

        Raises:
            TokenInvalidError: Token is not a token we signed
        """
        try:
            self._codec.decode(token)
        except TokenExpiredError:
            return None

        admin = self.get_admin_from_token(token)
        if admin is None:
            return None

        if not self.add_to_blacklist(token):
            return None

        new_token = self.issue_token(admin)
        self.delete_token(token)
        return new_token

    def update_cached_admin(self, token: str, admin: SysAdmin) -> bool:
        """Replace the cached admin for a token, keeping its TTL."""
        return self._store.replace(token, admin)

    def revoke_all(self, admin_id: int) -> int:
        """
        Revoke every live token of an admin.

        Returns:
            Number of tokens revoked
        """
        revoked = 0
        for token in self._store.tokens_for_admin(admin_id):
            self.add_to_blacklist(token)
            if self.delete_token(token):
                revoked += 1

        if revoked:
            logger.info("Revoked %d token(s) for admin id %s", revoked, admin_id)
        return revoked

