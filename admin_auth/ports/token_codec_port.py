"""
Token Codec Port - Interface for signing and verifying bearer tokens.

Verification here is stateless: signature, issuer and expiry only.
Revocation lives in TokenStorePort.

Implementations:
- JWTTokenAdapter: HMAC/RSA signed JWTs (PyJWT)
"""

from abc import ABC, abstractmethod
from typing import Optional
from admin_auth.domain.admin import SysAdmin
from admin_auth.domain.token import TokenClaims


class TokenCodecPort(ABC):
    """Port: Create and decode signed admin tokens."""

    @abstractmethod
    def create_token(self, admin: SysAdmin, expires_in: int = 7200) -> str:
        """
        Create a signed token for an admin.

        Args:
            admin: Admin the token is issued to
            expires_in: Token lifetime in seconds

        Returns:
            Token string
        """
        pass

    @abstractmethod
    def decode(self, token: str, verify_exp: bool = True) -> TokenClaims:
        """
        Verify a token and return its claims.

        Args:
            token: Token string
            verify_exp: Reject expired tokens (default True)

        Returns:
            Decoded claims

        Raises:
            TokenExpiredError: If the token is past its expiry
            TokenInvalidError: If the token is malformed or the signature fails
        """
        pass

    def get_token_from_header(self, auth_header: Optional[str]) -> Optional[str]:
        """
        Extract the token from an Authorization header.

        Args:
            auth_header: Header value, format "Bearer {token}"

        Returns:
            Token string, or None if the header is missing or malformed
        """
        if not auth_header:
            return None
        scheme, _, token = auth_header.strip().partition(" ")
        if scheme.lower() != "bearer":
            return None
        token = token.strip()
        return token or None
