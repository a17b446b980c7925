"""
Password hashing and bearer token helpers.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt

from ..errors import AuthError

BCRYPT_ROUNDS = 10
TOKEN_ALGORITHM = "HS256"
TOKEN_TTL = timedelta(days=7)


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Salted bcrypt hash of ``password``."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def issue_token(user_id: int, email: str, secret: str, ttl: timedelta = TOKEN_TTL) -> str:
    """Signed token carrying the user's id and email."""
    now = datetime.now(timezone.utc)
    claims = {"id": user_id, "email": email, "iat": now, "exp": now + ttl}
    return jwt.encode(claims, secret, algorithm=TOKEN_ALGORITHM)


def verify_token(token: str, secret: str) -> Dict[str, Any]:
    """
    Decode and verify a token.

    Raises:
        AuthError: if the signature is invalid or the token has expired
    """
    try:
        return jwt.decode(token, secret, algorithms=[TOKEN_ALGORITHM])
    except jwt.InvalidTokenError as e:
        raise AuthError("invalid token") from e
