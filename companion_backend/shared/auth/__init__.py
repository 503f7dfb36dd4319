"""Authentication and caller identity"""
from shared.auth.identity import AuthContext
from shared.auth.jwt import require_auth, optional_auth, current_auth

__all__ = [
    'AuthContext',
    'require_auth',
    'optional_auth',
    'current_auth',
]
