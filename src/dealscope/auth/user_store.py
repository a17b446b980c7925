"""
Flat-file user storage.

Users live in one JSON array that is read completely and rewritten
wholesale on every change. Writes within a process are serialised by a lock
and land through an atomic rename; several processes sharing the file can
still lose updates.
"""
from __future__ import annotations

import json
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import List, Optional

from ..errors import UserExistsError
from ..logger import get_logger
from ..models import User

logger = get_logger(__name__)


class UserStore:
    """JSON-array backed user repository."""

    _locks: dict = {}
    _locks_guard = threading.Lock()

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        # One lock per file so separate stores over the same file still serialise
        with self._locks_guard:
            self._lock = self._locks.setdefault(self.path.resolve(), threading.Lock())

    def load(self) -> List[User]:
        """Read every stored user; a missing or unreadable file reads as empty."""
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                records = json.load(f)
            return [User.from_record(r) for r in records]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Could not read user store {self.path}: {e}")
            return []

    def save(self, users: List[User]) -> None:
        """Replace the stored users with ``users``."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".users-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([u.to_record() for u in users], f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def find_by_email(self, email: str) -> Optional[User]:
        for user in self.load():
            if user.email == email:
                return user
        return None

    def add_user(self, *, name: str, email: str, password_hash: str) -> User:
        """
        Append a new user.

        Raises:
            UserExistsError: if ``email`` is already registered
        """
        with self._lock:
            users = self.load()
            if any(u.email == email for u in users):
                raise UserExistsError()

            user = User(
                id=self._next_id(users),
                name=name,
                email=email,
                password_hash=password_hash,
            )
            users.append(user)
            self.save(users)

        logger.info(f"Registered user {user.id}")
        return user

    @staticmethod
    def _next_id(users: List[User]) -> int:
        """Millisecond timestamp, bumped past the largest existing id."""
        now = int(time.time() * 1000)
        highest = max((u.id for u in users), default=0)
        return max(now, highest + 1)
