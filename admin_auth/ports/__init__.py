"""
Ports - Interfaces for token signing, token storage and persistence.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from admin_auth.ports.token_codec_port import TokenCodecPort
from admin_auth.ports.token_store_port import TokenStorePort
from admin_auth.ports.admin_port import AdminRepositoryPort
from admin_auth.ports.login_log_port import LoginLogRepositoryPort, LoginLogQuery

__all__ = [
    # Tokens
    "TokenCodecPort",
    "TokenStorePort",
    # Persistence
    "AdminRepositoryPort",
    "LoginLogRepositoryPort",
    "LoginLogQuery",
]
