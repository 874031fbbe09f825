"""
Admin Service - Login, profile and password use cases.
"""

import logging
from typing import List, Optional

from admin_auth.ports.admin_port import AdminRepositoryPort
from admin_auth.domain.admin import SysAdmin, AdminStatus, SUPER_ADMIN_ROLE
from admin_auth.domain.login_log import LoginStatus
from admin_auth.domain.result import ResultCode
from admin_auth.domain.clock import now_utc
from admin_auth.exceptions import BusinessError
from admin_auth.schemas import (
    LoginRequest,
    LoginResponse,
    UserInfo,
    UpdateAdminRequest,
    ChangePasswordRequest,
)
from admin_auth.services.passwords import hash_password, verify_password
from admin_auth.services.token_service import TokenService
from admin_auth.services.login_log_service import LoginLogService

logger = logging.getLogger(__name__)


class AdminService:
    """
    Administrator use cases.

    Every login attempt, successful or not, is written to the login log.
    """

    def __init__(
        self,
        repository: AdminRepositoryPort,
        tokens: TokenService,
        login_logs: LoginLogService,
    ):
        self._repository = repository
        self._tokens = tokens
        self._login_logs = login_logs

    def login(
        self,
        request: LoginRequest,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> LoginResponse:
        """
        Authenticate with username and password.

        Raises:
            BusinessError: LOGIN_FAILED for unknown user or wrong password,
                ACCOUNT_DISABLED for a disabled account
        """
        username = request.username.strip()
        admin = self._repository.find_by_username(username)

        if admin is None or not verify_password(request.password, admin.password_hash):
            self._login_logs.record(
                username, ip_address, user_agent, LoginStatus.FAILURE,
                ResultCode.LOGIN_FAILED.message,
                admin_id=admin.id if admin else None,
            )
            raise BusinessError(ResultCode.LOGIN_FAILED)

        if not admin.is_enabled():
            self._login_logs.record(
                username, ip_address, user_agent, LoginStatus.FAILURE,
                ResultCode.ACCOUNT_DISABLED.message, admin_id=admin.id,
            )
            raise BusinessError(ResultCode.ACCOUNT_DISABLED)

        login_time = now_utc()
        self._repository.record_login(admin.id, login_time, ip_address)
        admin.last_login_time = login_time
        admin.last_login_ip = ip_address
        admin.password_hash = None
        admin.roles = self.get_admin_roles(admin.id)
        admin.permissions = self.get_admin_permissions(admin.id)

        token = self._tokens.issue_token(admin)
        self._login_logs.record(
            username, ip_address, user_agent, LoginStatus.SUCCESS,
            "Login succeeded", admin_id=admin.id,
        )

        return LoginResponse(
            token=token,
            token_type="Bearer",
            expires_in=self._tokens.token_ttl,
            user_info=UserInfo.from_admin(admin),
        )

    def get_admin_roles(self, admin_id: int) -> List[str]:
        return self._repository.get_role_codes(admin_id)

    def get_admin_permissions(self, admin_id: int) -> List[str]:
        """Permission codes; a super admin holds the wildcard "*"."""
        if SUPER_ADMIN_ROLE in self._repository.get_role_codes(admin_id):
            return ["*"]
        return self._repository.get_permission_codes(admin_id)

    def get_admin(self, admin_id: int) -> Optional[SysAdmin]:
        """Admin with roles and permissions, without the password hash."""
        admin = self._repository.find_by_id(admin_id)
        if admin is None:
            return None
        admin.password_hash = None
        admin.roles = self.get_admin_roles(admin_id)
        admin.permissions = self.get_admin_permissions(admin_id)
        return admin

    def update_current_user_info(self, admin_id: int, request: UpdateAdminRequest) -> bool:
        """
        Update non-password profile fields.

        Raises:
            BusinessError: DATA_NOT_EXIST for unknown admin,
                DATA_CONFLICT when the email belongs to another admin
        """
        if self._repository.find_by_id(admin_id) is None:
            raise BusinessError(ResultCode.DATA_NOT_EXIST, "Admin does not exist")

        fields = request.changed_fields()
        email = fields.get("email")
        if email:
            owner = self._repository.find_by_email(email)
            if owner is not None and owner.id != admin_id:
                raise BusinessError(ResultCode.DATA_CONFLICT, "Email is already used by another admin")

        return self._repository.update_profile(admin_id, fields)

    def change_current_user_password(self, admin_id: int, request: ChangePasswordRequest) -> bool:
        """
        Change password after checking the old one.

        Raises:
            BusinessError: DATA_NOT_EXIST for unknown admin, PARAM_ERROR when
                the old password is wrong or the new one is unacceptable
        """
        admin = self._repository.find_by_id(admin_id)
        if admin is None:
            raise BusinessError(ResultCode.DATA_NOT_EXIST, "Admin does not exist")

        if not verify_password(request.old_password, admin.password_hash):
            raise BusinessError(ResultCode.PARAM_ERROR, "Old password is incorrect")
        if request.new_password != request.confirm_password:
            raise BusinessError(ResultCode.PARAM_ERROR, "New password and confirmation do not match")
        if request.new_password == request.old_password:
            raise BusinessError(ResultCode.PARAM_ERROR, "New password must differ from the old password")

        return self._repository.update_password(admin_id, hash_password(request.new_password))

    def create_admin(
        self,
        username: str,
        password: str,
        real_name: Optional[str] = None,
        email: Optional[str] = None,
        role_codes: Optional[List[str]] = None,
        status: AdminStatus = AdminStatus.ENABLED,
    ) -> SysAdmin:
        """
        Create an admin account.

        Raises:
            BusinessError: DATA_CONFLICT if username or email is taken
        """
        if self._repository.find_by_username(username) is not None:
            raise BusinessError(ResultCode.DATA_CONFLICT, "Username already exists")
        if email and self._repository.find_by_email(email) is not None:
            raise BusinessError(ResultCode.DATA_CONFLICT, "Email already exists")

        admin = SysAdmin(
            id=0,
            username=username,
            password_hash=hash_password(password),
            real_name=real_name,
            email=email,
            status=status,
        )
        return self._repository.create(admin, role_codes=role_codes)

    def ensure_default_admin(self, username: Optional[str], password: Optional[str]) -> Optional[SysAdmin]:
        """Create the bootstrap super admin if configured and missing."""
        if not username or not password:
            return None

        existing = self._repository.find_by_username(username)
        if existing is not None:
            return existing

        logger.info("Creating default admin: %s", username)
        return self.create_admin(username, password, real_name="Administrator", role_codes=[SUPER_ADMIN_ROLE])
