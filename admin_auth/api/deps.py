"""
API dependency helpers: service container, bearer guard, client origin.
"""
from typing import Optional

from fastapi import Header, Request

from admin_auth.domain.admin import SysAdmin
from admin_auth.exceptions import TokenInvalidError


def get_container(request: Request):
    return request.app.state.container


def client_ip(request: Request) -> Optional[str]:
    """X-Forwarded-For (first hop), then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None


def require_admin(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> SysAdmin:
    """
    Bearer guard for protected routes.

    Raises TokenInvalidError / TokenExpiredError, rendered as 701 / 702 envelopes.
    """
    tokens = get_container(request).tokens
    token = tokens.get_token_from_header(authorization)
    if token is None:
        raise TokenInvalidError("Token invalid")
    return tokens.validate(token)
