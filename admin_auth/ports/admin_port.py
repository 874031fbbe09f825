"""
Admin Repository Port - Interface for administrator persistence.

Implementations:
- SQLAlchemyAdminRepository: Relational storage via SQLAlchemy
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from datetime import datetime
from admin_auth.domain.admin import SysAdmin


class AdminRepositoryPort(ABC):
    """Port: Load and persist administrator accounts."""

    @abstractmethod
    def find_by_id(self, admin_id: int) -> Optional[SysAdmin]:
        """Find an admin by ID (password hash included)."""
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[SysAdmin]:
        """Find an admin by username (password hash included)."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[SysAdmin]:
        """Find an admin by email."""
        pass

    @abstractmethod
    def create(self, admin: SysAdmin, role_codes: Optional[List[str]] = None) -> SysAdmin:
        """
        Persist a new admin.

        Args:
            admin: Admin to create (password_hash must be set, id is ignored)
            role_codes: Roles to grant; unknown roles are created

        Returns:
            Stored admin with its assigned ID
        """
        pass

    @abstractmethod
    def update_profile(self, admin_id: int, fields: Dict[str, Any]) -> bool:
        """
        Update profile columns.

        Args:
            admin_id: Admin ID
            fields: Column values keyed by SysAdmin attribute name

        Returns:
            True if updated, False if not found
        """
        pass

    @abstractmethod
    def update_password(self, admin_id: int, password_hash: str) -> bool:
        """Store a new password hash. False if the admin does not exist."""
        pass

    @abstractmethod
    def record_login(self, admin_id: int, login_time: datetime, ip_address: Optional[str]) -> bool:
        """Stamp last login time and IP. False if the admin does not exist."""
        pass

    @abstractmethod
    def get_role_codes(self, admin_id: int) -> List[str]:
        """Role codes granted to an admin."""
        pass

    @abstractmethod
    def get_permission_codes(self, admin_id: int) -> List[str]:
        """Permission codes granted to an admin through its roles."""
        pass
