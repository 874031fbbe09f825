"""
SQLAlchemy Admin Repository - Relational admin, role and permission storage.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from admin_auth.ports.admin_port import AdminRepositoryPort
from admin_auth.domain.admin import SysAdmin, AdminStatus
from admin_auth.domain.clock import now_utc
from admin_auth.db.models import SysAdminModel, SysRoleModel


# Columns update_profile may touch
PROFILE_FIELDS = ("real_name", "email", "phone", "avatar")


class SQLAlchemyAdminRepository(AdminRepositoryPort):
    """
    Admin persistence over SQLAlchemy.

    Each call runs in its own session from the given factory.
    """

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize repository.

        Args:
            session_factory: Configured sessionmaker
        """
        self._session_factory = session_factory

    def find_by_id(self, admin_id: int) -> Optional[SysAdmin]:
        with self._session_factory() as db:
            row = db.get(SysAdminModel, admin_id)
            return self._to_domain(row) if row else None

    def find_by_username(self, username: str) -> Optional[SysAdmin]:
        with self._session_factory() as db:
            row = db.scalars(select(SysAdminModel).where(SysAdminModel.username == username)).first()
            return self._to_domain(row) if row else None

    def find_by_email(self, email: str) -> Optional[SysAdmin]:
        with self._session_factory() as db:
            row = db.scalars(select(SysAdminModel).where(SysAdminModel.email == email)).first()
            return self._to_domain(row) if row else None

    def create(self, admin: SysAdmin, role_codes: Optional[List[str]] = None) -> SysAdmin:
        with self._session_factory() as db:
            row = SysAdminModel(
                username=admin.username,
                password_hash=admin.password_hash,
                real_name=admin.real_name,
                email=admin.email,
                phone=admin.phone,
                avatar=admin.avatar,
                status=admin.status.value,
                created_at=admin.created_at or now_utc(),
            )
            for code in role_codes or []:
                role = db.scalars(select(SysRoleModel).where(SysRoleModel.role_code == code)).first()
                if role is None:
                    role = SysRoleModel(role_code=code, role_name=code)
                    db.add(role)
                row.roles.append(role)

            db.add(row)
            db.commit()
            db.refresh(row)
            return self._to_domain(row)

    def update_profile(self, admin_id: int, fields: Dict[str, Any]) -> bool:
        with self._session_factory() as db:
            row = db.get(SysAdminModel, admin_id)
            if row is None:
                return False

            for name, value in fields.items():
                if name in PROFILE_FIELDS:
                    setattr(row, name, value)
            row.updated_at = now_utc()
            db.commit()
            return True

    def update_password(self, admin_id: int, password_hash: str) -> bool:
        with self._session_factory() as db:
            row = db.get(SysAdminModel, admin_id)
            if row is None:
                return False

            row.password_hash = password_hash
            row.updated_at = now_utc()
            db.commit()
            return True

    def record_login(self, admin_id: int, login_time: datetime, ip_address: Optional[str]) -> bool:
        with self._session_factory() as db:
            row = db.get(SysAdminModel, admin_id)
            if row is None:
                return False

            row.last_login_time = login_time
            row.last_login_ip = ip_address
            db.commit()
            return True

    def get_role_codes(self, admin_id: int) -> List[str]:
        with self._session_factory() as db:
            row = db.get(SysAdminModel, admin_id)
            if row is None:
                return []
            return sorted(role.role_code for role in row.roles if role.status == 1)

    def get_permission_codes(self, admin_id: int) -> List[str]:
        with self._session_factory() as db:
            row = db.get(SysAdminModel, admin_id)
            if row is None:
                return []

            codes = set()
            for role in row.roles:
                if role.status != 1:
                    continue
                codes.update(p.permission_code for p in role.permissions)
            return sorted(codes)

    @staticmethod
    def _to_domain(row: SysAdminModel) -> SysAdmin:
        return SysAdmin(
            id=row.id,
            username=row.username,
            password_hash=row.password_hash,
            real_name=row.real_name,
            email=row.email,
            phone=row.phone,
            avatar=row.avatar,
            status=AdminStatus(row.status),
            last_login_time=row.last_login_time,
            last_login_ip=row.last_login_ip,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
