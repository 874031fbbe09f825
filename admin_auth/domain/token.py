"""
Token Claims - What a verified bearer token asserts.
"""

from dataclasses import dataclass
from typing import Optional
from datetime import datetime

from admin_auth.domain.clock import now_utc


@dataclass(frozen=True)
class TokenClaims:
    """
    Claims carried by a signed admin token.

    Domain rules:
    - subject is the admin id rendered as a string (JWT "sub")
    - token_id (JWT "jti") is unique per issued token, so two tokens
      issued within the same second still differ
    """
    subject: str
    username: str
    token_id: str
    issued_at: datetime
    expires_at: datetime
    issuer: Optional[str] = None

    @property
    def admin_id(self) -> Optional[int]:
        """Admin id from the subject, None if the subject is not numeric."""
        try:
            return int(self.subject)
        except (TypeError, ValueError):
            return None

    def is_expired(self) -> bool:
        return now_utc() >= self.expires_at

    def remaining_seconds(self) -> int:
        """Whole seconds until expiry (never negative)."""
        remaining = (self.expires_at - now_utc()).total_seconds()
        return max(0, int(remaining))
