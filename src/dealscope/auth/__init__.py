"""
User registration, login and the bearer-token gate.
"""
from .decorators import require_auth
from .security import check_password, hash_password, issue_token, verify_token
from .service import AuthService
from .user_store import UserStore

__all__ = [
    "require_auth",
    "check_password",
    "hash_password",
    "issue_token",
    "verify_token",
    "AuthService",
    "UserStore",
]
