"""
SysAdmin Domain Model - An administrator account.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List
from datetime import datetime
from enum import Enum

from admin_auth.domain.clock import now_utc


SUPER_ADMIN_ROLE = "super_admin"


class AdminStatus(Enum):
    """Account status flag as persisted."""
    DISABLED = 0
    ENABLED = 1


@dataclass
class SysAdmin:
    """
    SysAdmin entity - an administrator who can sign in to the console.

    Domain rules:
    - id and username are immutable once persisted
    - email must be unique across admins (enforced by the service)
    - password_hash never leaves the repository layer (not cached, not serialized)
    """
    id: int
    username: str
    password_hash: Optional[str] = None

    # Profile
    real_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None

    status: AdminStatus = AdminStatus.ENABLED
    last_login_time: Optional[datetime] = None
    last_login_ip: Optional[str] = None
    created_at: datetime = field(default_factory=now_utc)
    updated_at: Optional[datetime] = None

    # Authorization, loaded alongside the account
    roles: List[str] = field(default_factory=list)
    permissions: List[str] = field(default_factory=list)

    def is_enabled(self) -> bool:
        """Check if the account may log in."""
        return self.status == AdminStatus.ENABLED

    def has_permission(self, permission: str) -> bool:
        """
        Check if admin has a specific permission.

        The "*" permission (granted to super admins) matches everything.
        """
        return "*" in self.permissions or permission in self.permissions

    def to_user_info(self) -> Dict[str, Any]:
        """Public profile returned by /auth/info and on login."""
        return {
            "id": self.id,
            "username": self.username,
            "realName": self.real_name,
            "email": self.email,
            "avatar": self.avatar,
            "lastLoginTime": self.last_login_time.isoformat() if self.last_login_time else None,
            "roles": list(self.roles),
            "permissions": list(self.permissions),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict (cache form, no password hash)."""
        return {
            "id": self.id,
            "username": self.username,
            "real_name": self.real_name,
            "email": self.email,
            "phone": self.phone,
            "avatar": self.avatar,
            "status": self.status.value,
            "last_login_time": self.last_login_time.isoformat() if self.last_login_time else None,
            "last_login_ip": self.last_login_ip,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "roles": list(self.roles),
            "permissions": list(self.permissions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SysAdmin":
        """Deserialize from dict."""
        return cls(
            id=int(data["id"]),
            username=data["username"],
            real_name=data.get("real_name"),
            email=data.get("email"),
            phone=data.get("phone"),
            avatar=data.get("avatar"),
            status=AdminStatus(data.get("status", AdminStatus.ENABLED.value)),
            last_login_time=datetime.fromisoformat(data["last_login_time"]) if data.get("last_login_time") else None,
            last_login_ip=data.get("last_login_ip"),
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else now_utc(),
            updated_at=datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else None,
            roles=list(data.get("roles", [])),
            permissions=list(data.get("permissions", [])),
        )
