"""
SQLAlchemy models for administrators, roles, permissions and login logs.
"""
from sqlalchemy import Column, Integer, SmallInteger, String, DateTime, ForeignKey, Table, Index
from sqlalchemy.orm import declarative_base, relationship

from admin_auth.domain.clock import now_utc


Base = declarative_base()


sys_admin_role = Table(
    "sys_admin_role",
    Base.metadata,
    Column("admin_id", Integer, ForeignKey("sys_admin.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("sys_role.id", ondelete="CASCADE"), primary_key=True),
)

sys_role_permission = Table(
    "sys_role_permission",
    Base.metadata,
    Column("role_id", Integer, ForeignKey("sys_role.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", Integer, ForeignKey("sys_permission.id", ondelete="CASCADE"), primary_key=True),
)


class SysAdminModel(Base):
    __tablename__ = "sys_admin"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(64), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    real_name = Column(String(64), nullable=True)
    email = Column(String(128), nullable=True, unique=True)
    phone = Column(String(32), nullable=True)
    avatar = Column(String(512), nullable=True)
    status = Column(SmallInteger, nullable=False, default=1)  # 1 enabled, 0 disabled
    last_login_time = Column(DateTime, nullable=True)
    last_login_ip = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc, nullable=True)

    roles = relationship("SysRoleModel", secondary=sys_admin_role, lazy="selectin")


class SysRoleModel(Base):
    __tablename__ = "sys_role"

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_code = Column(String(64), nullable=False, unique=True)
    role_name = Column(String(64), nullable=False)
    status = Column(SmallInteger, nullable=False, default=1)

    permissions = relationship("SysPermissionModel", secondary=sys_role_permission, lazy="selectin")


class SysPermissionModel(Base):
    __tablename__ = "sys_permission"

    id = Column(Integer, primary_key=True, autoincrement=True)
    permission_code = Column(String(128), nullable=False, unique=True)
    permission_name = Column(String(64), nullable=True)


class SysLoginLogModel(Base):
    __tablename__ = "sys_login_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    admin_id = Column(Integer, ForeignKey("sys_admin.id", ondelete="SET NULL"), nullable=True)
    username = Column(String(64), nullable=False)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(512), nullable=True)
    status = Column(SmallInteger, nullable=False)  # 1 success, 0 failure
    message = Column(String(255), nullable=True)
    login_time = Column(DateTime, default=now_utc, nullable=False)

    __table_args__ = (
        Index("ix_sys_login_log_login_time", "login_time"),
        Index("ix_sys_login_log_username", "username"),
    )
