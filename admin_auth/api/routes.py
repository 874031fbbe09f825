"""
/auth endpoints: login, logout, refresh, profile and login logs.

Each handler maps service outcomes onto the response envelope; sentinel
checks (no token, no cached session) return their own codes.
"""
import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request
from pydantic import ValidationError

from admin_auth.domain.result import Result, ResultCode
from admin_auth.exceptions import BusinessError, TokenInvalidError
from admin_auth.schemas import (
    LoginRequest,
    UserInfo,
    UpdateAdminRequest,
    ChangePasswordRequest,
    LoginLogQueryRequest,
)
from admin_auth.api.deps import get_container, client_ip, require_admin
from admin_auth.api.errors import validation_message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_invalid() -> dict:
    return Result.error("Token invalid", ResultCode.TOKEN_INVALID).to_dict()


def _session_expired() -> dict:
    return Result.error("User info expired, please log in again", ResultCode.TOKEN_EXPIRED).to_dict()


@router.post("/login")
def login(payload: LoginRequest, request: Request, container=Depends(get_container)):
    logger.info("Login request for user: %s", payload.username)
    try:
        response = container.admins.login(
            payload,
            ip_address=client_ip(request),
            user_agent=request.headers.get("user-agent"),
        )
    except BusinessError as e:
        logger.info("Login rejected for user %s: %s", payload.username, e.message)
        return Result.error(e.message, e.code).to_dict()
    except Exception:
        logger.exception("Login failed")
        return Result.error("Login failed").to_dict()

    return Result.success("Login succeeded", response).to_dict()


@router.post("/logout")
def logout(
    authorization: Optional[str] = Header(default=None),
    container=Depends(get_container),
):
    tokens = container.tokens
    try:
        token = tokens.get_token_from_header(authorization)
        if token is not None and tokens.revoke(token):
            logger.info("User logged out: %s", tokens.get_username_from_token(token))
        return Result.success().to_dict()
    except Exception:
        logger.exception("Logout failed")
        return Result.error("Logout failed").to_dict()


@router.post("/refresh")
def refresh(
    authorization: Optional[str] = Header(default=None),
    container=Depends(get_container),
):
    tokens = container.tokens
    try:
        token = tokens.get_token_from_header(authorization)
        if token is None:
            return _token_invalid()

        try:
            new_token = tokens.refresh_token(token)
        except TokenInvalidError:
            return _token_invalid()
        if new_token is None:
            return Result.error("Token expired, please log in again", ResultCode.TOKEN_EXPIRED).to_dict()

        logger.info("Token refreshed for user: %s", tokens.get_username_from_token(new_token))
        return Result.success("Refresh succeeded", new_token).to_dict()
    except Exception:
        logger.exception("Token refresh failed")
        return Result.error("Token refresh failed").to_dict()


@router.get("/info")
def info(
    authorization: Optional[str] = Header(default=None),
    container=Depends(get_container),
):
    try:
        token = container.tokens.get_token_from_header(authorization)
        if token is None:
            return _token_invalid()

        admin = container.tokens.get_admin_from_token(token)
        if admin is None:
            return _session_expired()

        admin.roles = container.admins.get_admin_roles(admin.id)
        admin.permissions = container.admins.get_admin_permissions(admin.id)

        logger.debug("Fetched user info: %s", admin.username)
        return Result.success("Fetched successfully", UserInfo.from_admin(admin)).to_dict()
    except Exception:
        logger.exception("Fetching user info failed")
        return Result.error("Fetching user info failed").to_dict()


@router.get("/login-logs", dependencies=[Depends(require_admin)])
def get_login_logs(
    page_num: int = Query(default=1, alias="pageNum"),
    page_size: int = Query(default=10, alias="pageSize"),
    username: Optional[str] = Query(default=None),
    ip_address: Optional[str] = Query(default=None, alias="ipAddress"),
    status: Optional[int] = Query(default=None),
    start_time: Optional[datetime] = Query(default=None, alias="startTime"),
    end_time: Optional[datetime] = Query(default=None, alias="endTime"),
    container=Depends(get_container),
):
    try:
        query = LoginLogQueryRequest(
            page_num=page_num,
            page_size=page_size,
            username=username,
            ip_address=ip_address,
            status=status,
            start_time=start_time,
            end_time=end_time,
        )
    except ValidationError as e:
        return Result.error(validation_message(e), ResultCode.PARAM_ERROR).to_dict()

    try:
        page = container.login_logs.get_login_log_page(query.to_query())
        return Result.success("Query succeeded", page).to_dict()
    except Exception:
        logger.exception("Querying login logs failed")
        return Result.error("Querying login logs failed").to_dict()


@router.get("/login-logs/{log_id}", dependencies=[Depends(require_admin)])
def get_login_log_by_id(log_id: int, container=Depends(get_container)):
    try:
        response = container.login_logs.get_by_id(log_id)
        if response is None:
            return Result.error("Login log does not exist", ResultCode.DATA_NOT_EXIST).to_dict()
        return Result.success("Query succeeded", response).to_dict()
    except Exception:
        logger.exception("Querying login log detail failed")
        return Result.error("Querying login log detail failed").to_dict()


@router.delete("/login-logs", dependencies=[Depends(require_admin)])
def clear_login_logs(container=Depends(get_container)):
    try:
        if container.login_logs.clear_login_log():
            return Result.success("Login logs cleared").to_dict()
        return Result.error("Clearing login logs failed").to_dict()
    except Exception:
        logger.exception("Clearing login logs failed")
        return Result.error("Clearing login logs failed").to_dict()


@router.put("/profile")
def update_profile(
    payload: UpdateAdminRequest,
    authorization: Optional[str] = Header(default=None),
    container=Depends(get_container),
):
    tokens = container.tokens
    try:
        token = tokens.get_token_from_header(authorization)
        if token is None:
            return _token_invalid()

        user_id = tokens.get_user_id_from_token(token)
        if user_id is None:
            return _token_invalid()

        admin = tokens.get_admin_from_token(token)
        if admin is None:
            return _session_expired()

        if not container.admins.update_current_user_info(user_id, payload):
            return Result.error("Profile update failed").to_dict()

        refreshed = container.admins.get_admin(user_id)
        if refreshed is not None:
            tokens.update_cached_admin(token, refreshed)

        logger.info("Profile updated for user: %s", admin.username)
        return Result.success("Profile updated").to_dict()
    except BusinessError as e:
        return Result.error(e.message, e.code).to_dict()
    except Exception as e:
        logger.exception("Profile update failed")
        return Result.error(str(e) or "Profile update failed").to_dict()


@router.put("/password")
def change_password(
    payload: ChangePasswordRequest,
    authorization: Optional[str] = Header(default=None),
    container=Depends(get_container),
):
    tokens = container.tokens
    try:
        token = tokens.get_token_from_header(authorization)
        if token is None:
            return _token_invalid()

        user_id = tokens.get_user_id_from_token(token)
        if user_id is None:
            return _token_invalid()

        admin = tokens.get_admin_from_token(token)
        if admin is None:
            return _session_expired()

        if not container.admins.change_current_user_password(user_id, payload):
            return Result.error("Password change failed").to_dict()

        logger.info("Password changed for user: %s", admin.username)

        # Force a fresh login everywhere
        tokens.revoke(token)
        tokens.revoke_all(user_id)

        return Result.success("Password changed, please log in again").to_dict()
    except BusinessError as e:
        return Result.error(e.message, e.code).to_dict()
    except Exception as e:
        logger.exception("Password change failed")
        return Result.error(str(e) or "Password change failed").to_dict()
