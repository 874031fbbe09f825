"""
JWT Token Adapter - Implements TokenCodecPort with signed JWTs.
"""

import uuid
import jwt
from datetime import datetime, timedelta, timezone
from admin_auth.ports.token_codec_port import TokenCodecPort
from admin_auth.domain.admin import SysAdmin
from admin_auth.domain.token import TokenClaims
from admin_auth.domain.clock import now_utc
from admin_auth.exceptions import TokenInvalidError, TokenExpiredError


class JWTTokenAdapter(TokenCodecPort):
    """
    JWT-based token codec.

    Uses PyJWT for token creation and verification. Holds no state:
    blacklisting is the token store's job.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        issuer: str = "admin-auth",
        leeway: int = 0,
    ):
        """
        Initialize JWT adapter.

        Args:
            secret: JWT signing secret
            algorithm: JWT algorithm (default HS256)
            issuer: Token issuer claim
            leeway: Clock skew tolerance in seconds
        """
        self._secret = secret
        self._algorithm = algorithm
        self._issuer = issuer
        self._leeway = leeway

    def create_token(self, admin: SysAdmin, expires_in: int = 7200) -> str:
        """
        Create a JWT token for an admin.

        Args:
            admin: Admin to create token for
            expires_in: Token expiration in seconds

        Returns:
            JWT token string
        """
        now = now_utc()
        payload = {
            "sub": str(admin.id),
            "username": admin.username,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + timedelta(seconds=expires_in),
            "iss": self._issuer,
        }

        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str, verify_exp: bool = True) -> TokenClaims:
        """
        Verify a JWT token and return its claims.

        Args:
            token: JWT token string
            verify_exp: Reject expired tokens

        Returns:
            Decoded claims

        Raises:
            TokenExpiredError: Token is past its expiry
            TokenInvalidError: Bad signature, issuer, or payload
        """
        if not token:
            raise TokenInvalidError("Token is empty")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                leeway=self._leeway,
                options={
                    "verify_exp": verify_exp,
                    "require": ["sub", "exp", "iat"],
                },
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Token invalid: {e}")

        try:
            return TokenClaims(
                subject=str(payload["sub"]),
                username=payload.get("username", payload["sub"]),
                token_id=payload.get("jti", ""),
                issued_at=self._to_datetime(payload["iat"]),
                expires_at=self._to_datetime(payload["exp"]),
                issuer=payload.get("iss"),
            )
        except (KeyError, TypeError, ValueError, OverflowError):
            raise TokenInvalidError("Token payload malformed")

    @staticmethod
    def _to_datetime(value) -> datetime:
        """Numeric JWT date to naive UTC datetime."""
        return datetime.fromtimestamp(int(value), tz=timezone.utc).replace(tzinfo=None)
