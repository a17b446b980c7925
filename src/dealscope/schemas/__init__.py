"""
Pydantic schemas for API validation.
"""

from .auth import Credentials, LoginRequest, RegisterRequest

__all__ = [
    'Credentials',
    'LoginRequest',
    'RegisterRequest',
]
