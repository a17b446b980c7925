"""Registration and login."""
from __future__ import annotations

from typing import Any, Dict

from ..errors import AuthError
from ..logger import get_logger
from ..models import User
from .security import check_password, hash_password, issue_token
from .user_store import UserStore

logger = get_logger(__name__)


class AuthService:
    """Creates and authenticates users, issuing a bearer token for each."""

    def __init__(self, store: UserStore, secret: str) -> None:
        self.store = store
        self.secret = secret

    def register(self, *, email: str, password: str, name: str = "") -> Dict[str, Any]:
        user = self.store.add_user(name=name, email=email, password_hash=hash_password(password))
        return self._session_for(user)

    def login(self, *, email: str, password: str) -> Dict[str, Any]:
        user = self.store.find_by_email(email)
        if user is None or not check_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise AuthError("invalid credentials")
        return self._session_for(user)

    def _session_for(self, user: User) -> Dict[str, Any]:
        return {
            "token": issue_token(user.id, user.email, self.secret),
            "user": user.to_public_dict(),
        }
