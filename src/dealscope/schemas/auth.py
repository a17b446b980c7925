"""
Pydantic schemas for the register/login request bodies.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Credentials(BaseModel):
    """Email and password pair sent by the client."""
    email: str = Field(..., min_length=1, description="Account email")
    password: str = Field(..., min_length=1, description="Plain-text password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("email must not be blank")
        return v


class LoginRequest(Credentials):
    """Body of POST /api/login."""


class RegisterRequest(Credentials):
    """Body of POST /api/register."""
    name: Optional[str] = Field(default="", description="Display name")

    @field_validator("name")
    @classmethod
    def default_name(cls, v: Optional[str]) -> str:
        return (v or "").strip()
