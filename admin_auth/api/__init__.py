"""
HTTP API - FastAPI application exposing the /auth endpoints.
"""

from admin_auth.api.app import create_app, build_container, AuthContainer

__all__ = [
    "create_app",
    "build_container",
    "AuthContainer",
]
