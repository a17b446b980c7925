"""
Common contract for product sources.

Sources are shared by every request the app serves, so they hold no HTTP
session of their own: each ``fetch`` opens a fresh ``requests.Session``
through ``http_session()`` and closes it when done. A session passed to the
constructor is reused instead (tests inject mocks this way) and must then be
safe for the caller's threading.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional

import requests

from ..config import Config
from ..errors import SourceError, SourceNotConfigured
from ..models import NormalizedItem


class ProductSource(ABC):
    """
    One third-party shopping provider.

    Subclasses translate the provider's request/response shape into
    ``NormalizedItem`` records. ``fetch`` raises ``SourceNotConfigured`` when
    credentials are missing and ``SourceError`` (or a ``requests`` exception)
    when the provider misbehaves; callers decide what to do with that.
    """

    name: str = "source"

    def __init__(self, config: Config, *, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self._session = session

    @contextmanager
    def http_session(self) -> Iterator[requests.Session]:
        """The injected session, or a new one closed on exit."""
        if self._session is not None:
            yield self._session
            return
        with requests.Session() as session:
            yield session

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the credentials this source needs are present."""

    @abstractmethod
    def fetch(self, query: str) -> List[NormalizedItem]:
        """Search the provider for ``query``."""

    def _require_configured(self, what: str) -> None:
        if not self.is_configured():
            raise SourceNotConfigured(self.name, f"{what} not configured")

    def _json(self, response: requests.Response):
        """Raise on non-2xx and decode the body."""
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            raise SourceError(self.name, f"malformed JSON payload: {e}") from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(configured={self.is_configured()})"
