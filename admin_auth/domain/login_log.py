"""
LoginLog Domain Model - One recorded login attempt.
"""

from dataclasses import dataclass, field
from typing import Optional
from datetime import datetime
from enum import Enum

from admin_auth.domain.clock import now_utc


class LoginStatus(Enum):
    """Outcome of a login attempt."""
    FAILURE = 0
    SUCCESS = 1


@dataclass
class LoginLog:
    """
    LoginLog entity - outcome, origin and time of a login attempt.

    Failed attempts for unknown usernames have no admin_id.
    """
    id: Optional[int]
    username: str
    status: LoginStatus
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    message: Optional[str] = None
    admin_id: Optional[int] = None
    login_time: datetime = field(default_factory=now_utc)
