"""
Exceptions raised by the service layer and mapped to envelopes by the API.
"""

from typing import Optional

from admin_auth.domain.result import ResultCode


class AdminAuthError(Exception):
    """Base class for admin-auth errors."""

    code: int = ResultCode.ERROR

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is not None:
            self.code = int(code)
        if message is None:
            try:
                message = ResultCode(self.code).message
            except ValueError:
                message = ResultCode.ERROR.message
        self.message = message
        super().__init__(self.message)


class BusinessError(AdminAuthError):
    """A rule of the admin domain was violated (bad credentials, email taken, ...)."""

    def __init__(self, code: int, message: Optional[str] = None):
        super().__init__(message, code=code)


class TokenInvalidError(AdminAuthError):
    """Token is malformed, badly signed, or revoked."""

    code = ResultCode.TOKEN_INVALID


class TokenExpiredError(AdminAuthError):
    """Token passed its expiry or its cached session is gone."""

    code = ResultCode.TOKEN_EXPIRED
