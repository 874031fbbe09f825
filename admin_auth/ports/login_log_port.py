"""
Login Log Repository Port - Interface for login attempt persistence.

Implementations:
- SQLAlchemyLoginLogRepository: Relational storage via SQLAlchemy
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Tuple
from datetime import datetime
from admin_auth.domain.login_log import LoginLog, LoginStatus


@dataclass
class LoginLogQuery:
    """
    Filters and paging for login log queries.

    username and ip_address match as substrings; the time range is inclusive.
    """
    page_num: int = 1
    page_size: int = 10
    username: Optional[str] = None
    ip_address: Optional[str] = None
    status: Optional[LoginStatus] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def offset(self) -> int:
        return (max(self.page_num, 1) - 1) * self.page_size


class LoginLogRepositoryPort(ABC):
    """Port: Store and query login logs."""

    @abstractmethod
    def add(self, log: LoginLog) -> LoginLog:
        """
        Persist a login log.

        Args:
            log: Log to store (id is ignored)

        Returns:
            Stored log with its assigned ID
        """
        pass

    @abstractmethod
    def get(self, log_id: int) -> Optional[LoginLog]:
        """Get a login log by ID."""
        pass

    @abstractmethod
    def page(self, query: LoginLogQuery) -> Tuple[List[LoginLog], int]:
        """
        Query one page of login logs, newest first.

        Args:
            query: Filters and paging

        Returns:
            (records on the page, total matching records)
        """
        pass

    @abstractmethod
    def clear(self) -> int:
        """
        Delete all login logs.

        Returns:
            Number of rows deleted
        """
        pass
