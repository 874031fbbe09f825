"""
Request and response models for the /auth API (camelCase on the wire).
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from admin_auth.domain.admin import SysAdmin
from admin_auth.domain.login_log import LoginLog, LoginStatus
from admin_auth.ports.login_log_port import LoginLogQuery


EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^\+?[0-9][0-9\- ]{4,30}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class LoginRequest(CamelModel):
    username: str = Field(..., max_length=64)
    password: str = Field(..., max_length=128)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def _password_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Password must not be blank")
        return value


class UserInfo(CamelModel):
    id: int
    username: str
    real_name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
    last_login_time: Optional[datetime] = None
    roles: List[str] = Field(default_factory=list)
    permissions: List[str] = Field(default_factory=list)

    @classmethod
    def from_admin(cls, admin: SysAdmin) -> "UserInfo":
        return cls(
            id=admin.id,
            username=admin.username,
            real_name=admin.real_name,
            email=admin.email,
            avatar=admin.avatar,
            last_login_time=admin.last_login_time,
            roles=list(admin.roles),
            permissions=list(admin.permissions),
        )


class LoginResponse(CamelModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int
    user_info: UserInfo


class UpdateAdminRequest(CamelModel):
    """Profile fields; omitted fields are left unchanged, null clears a field."""
    real_name: Optional[str] = Field(default=None, max_length=64)
    email: Optional[str] = Field(default=None, max_length=128, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=32, pattern=PHONE_PATTERN)
    avatar: Optional[str] = Field(default=None, max_length=512)

    def changed_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=32)
    confirm_password: str = Field(..., min_length=1, max_length=32)


class LoginLogQueryRequest(CamelModel):
    page_num: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)
    username: Optional[str] = None
    ip_address: Optional[str] = None
    status: Optional[int] = Field(default=None, ge=0, le=1)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @model_validator(mode="after")
    def _check_range(self) -> "LoginLogQueryRequest":
        if self.start_time and self.end_time and self.start_time > self.end_time:
            raise ValueError("startTime must not be after endTime")
        return self

    def to_query(self) -> LoginLogQuery:
        return LoginLogQuery(
            page_num=self.page_num,
            page_size=self.page_size,
            username=(self.username or "").strip() or None,
            ip_address=(self.ip_address or "").strip() or None,
            status=LoginStatus(self.status) if self.status is not None else None,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class LoginLogResponse(CamelModel):
    id: int
    admin_id: Optional[int] = None
    username: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    status: int
    message: Optional[str] = None
    login_time: datetime

    @classmethod
    def from_log(cls, log: LoginLog) -> "LoginLogResponse":
        return cls(
            id=log.id,
            admin_id=log.admin_id,
            username=log.username,
            ip_address=log.ip_address,
            user_agent=log.user_agent,
            status=log.status.value,
            message=log.message,
            login_time=log.login_time,
        )
