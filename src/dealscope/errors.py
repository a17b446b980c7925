"""
Exception types raised across DealScope.
"""


class DealScopeError(Exception):
    """Base class for all DealScope errors."""


class SourceError(DealScopeError):
    """An upstream product source failed or returned an unusable payload."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class SourceNotConfigured(SourceError):
    """A source was called without its credentials."""


class APIError(DealScopeError):
    """Client-facing error with status code and message."""

    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv["error"] = self.message
        return rv


class AuthError(APIError):
    """Authentication errors"""

    def __init__(self, message, status_code=401):
        super().__init__(message, status_code)


class UserExistsError(APIError):
    """Registration attempted with an email that is already stored."""

    def __init__(self, message="email already in use", status_code=400):
        super().__init__(message, status_code)
