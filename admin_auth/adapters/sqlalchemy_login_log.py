"""
SQLAlchemy Login Log Repository - Login attempt history.
"""

from typing import Optional, List, Tuple
from sqlalchemy import select, func, delete
from sqlalchemy.orm import sessionmaker

from admin_auth.ports.login_log_port import LoginLogRepositoryPort, LoginLogQuery
from admin_auth.domain.login_log import LoginLog, LoginStatus
from admin_auth.domain.clock import now_utc
from admin_auth.db.models import SysLoginLogModel


class SQLAlchemyLoginLogRepository(LoginLogRepositoryPort):
    """Login log persistence over SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def add(self, log: LoginLog) -> LoginLog:
        with self._session_factory() as db:
            row = SysLoginLogModel(
                admin_id=log.admin_id,
                username=log.username,
                ip_address=log.ip_address,
                user_agent=log.user_agent,
                status=log.status.value,
                message=log.message,
                login_time=log.login_time or now_utc(),
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return self._to_domain(row)

    def get(self, log_id: int) -> Optional[LoginLog]:
        with self._session_factory() as db:
            row = db.get(SysLoginLogModel, log_id)
            return self._to_domain(row) if row else None

    def page(self, query: LoginLogQuery) -> Tuple[List[LoginLog], int]:
        conditions = []
        if query.username:
            conditions.append(SysLoginLogModel.username.contains(query.username))
        if query.ip_address:
            conditions.append(SysLoginLogModel.ip_address.contains(query.ip_address))
        if query.status is not None:
            conditions.append(SysLoginLogModel.status == query.status.value)
        if query.start_time:
            conditions.append(SysLoginLogModel.login_time >= query.start_time)
        if query.end_time:
            conditions.append(SysLoginLogModel.login_time <= query.end_time)

        with self._session_factory() as db:
            total = db.scalar(select(func.count(SysLoginLogModel.id)).where(*conditions)) or 0
            rows = db.scalars(
                select(SysLoginLogModel)
                .where(*conditions)
                .order_by(SysLoginLogModel.login_time.desc(), SysLoginLogModel.id.desc())
                .offset(query.offset)
                .limit(query.page_size)
            ).all()
            return [self._to_domain(row) for row in rows], int(total)

    def clear(self) -> int:
        with self._session_factory() as db:
            result = db.execute(delete(SysLoginLogModel))
            db.commit()
            return result.rowcount or 0

    @staticmethod
    def _to_domain(row: SysLoginLogModel) -> LoginLog:
        return LoginLog(
            id=row.id,
            username=row.username,
            status=LoginStatus(row.status),
            ip_address=row.ip_address,
            user_agent=row.user_agent,
            message=row.message,
            admin_id=row.admin_id,
            login_time=row.login_time,
        )
