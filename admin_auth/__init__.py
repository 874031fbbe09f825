"""
Admin Auth - Administrator authentication & token lifecycle

Hexagonal architecture for administrator login, bearer tokens, cached
sessions and login auditing.

Usage:
    from admin_auth.api import create_app
    from admin_auth.config import AuthSettings

    app = create_app(AuthSettings.from_env())

    # Or talk to a running service
    from admin_auth import AdminAuthClient

    client = AdminAuthClient(base_url="http://localhost:8000")
    token = client.login("admin", "secret")["token"]
"""

__version__ = "0.1.0"

from admin_auth.sdk.client import AdminAuthClient
from admin_auth.domain.admin import SysAdmin, AdminStatus
from admin_auth.domain.login_log import LoginLog, LoginStatus
from admin_auth.domain.result import Result, ResultCode, PageResult

__all__ = [
    "AdminAuthClient",
    "SysAdmin",
    "AdminStatus",
    "LoginLog",
    "LoginStatus",
    "Result",
    "ResultCode",
    "PageResult",
]
