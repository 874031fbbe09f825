"""
Services - Use cases composed from ports.
"""

from admin_auth.services.token_service import TokenService
from admin_auth.services.admin_service import AdminService
from admin_auth.services.login_log_service import LoginLogService
from admin_auth.services.passwords import hash_password, verify_password

__all__ = [
    "TokenService",
    "AdminService",
    "LoginLogService",
    "hash_password",
    "verify_password",
]
