"""
Domain Models - Pure business entities.

No infrastructure dependencies. Domain logic only.
"""

from admin_auth.domain.admin import SysAdmin, AdminStatus, SUPER_ADMIN_ROLE
from admin_auth.domain.login_log import LoginLog, LoginStatus
from admin_auth.domain.token import TokenClaims
from admin_auth.domain.result import Result, ResultCode, PageResult

__all__ = [
    "SysAdmin",
    "AdminStatus",
    "SUPER_ADMIN_ROLE",
    "LoginLog",
    "LoginStatus",
    "TokenClaims",
    "Result",
    "ResultCode",
    "PageResult",
]
