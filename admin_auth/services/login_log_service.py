"""
Login Log Service - Record and query login attempts.
"""

import logging
from typing import Optional

from admin_auth.ports.login_log_port import LoginLogRepositoryPort, LoginLogQuery
from admin_auth.domain.login_log import LoginLog, LoginStatus
from admin_auth.domain.result import PageResult
from admin_auth.domain.clock import now_utc
from admin_auth.schemas import LoginLogResponse

logger = logging.getLogger(__name__)


class LoginLogService:
    """Login log use cases."""

    def __init__(self, repository: LoginLogRepositoryPort):
        self._repository = repository

    def record(
        self,
        username: str,
        ip_address: Optional[str],
        user_agent: Optional[str],
        status: LoginStatus,
        message: Optional[str] = None,
        admin_id: Optional[int] = None,
    ) -> LoginLog:
        """Persist one login attempt."""
        log = LoginLog(
            id=None,
            username=username,
            status=status,
            ip_address=ip_address,
            user_agent=(user_agent or "")[:512] or None,
            message=message,
            admin_id=admin_id,
            login_time=now_utc(),
        )
        return self._repository.add(log)

    def get_login_log_page(self, query: LoginLogQuery) -> PageResult[LoginLogResponse]:
        records, total = self._repository.page(query)
        return PageResult(
            records=[LoginLogResponse.from_log(log) for log in records],
            total=total,
            page_num=query.page_num,
            page_size=query.page_size,
        )

    def get_by_id(self, log_id: int) -> Optional[LoginLogResponse]:
        log = self._repository.get(log_id)
        return LoginLogResponse.from_log(log) if log else None

    def clear_login_log(self) -> bool:
        deleted = self._repository.clear()
        logger.info("Cleared %d login log(s)", deleted)
        return True
