"""
SDK - Client for the admin auth HTTP API.
"""

from admin_auth.sdk.client import AdminAuthClient

__all__ = ["AdminAuthClient"]
