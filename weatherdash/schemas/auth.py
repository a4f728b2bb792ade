"""
Authentication schemas.

This module contains Pydantic schemas for authentication requests and responses.
Required-field checks happen in the credential store so that missing fields
produce the same messages whatever the transport.
"""

from typing import Optional

from pydantic import Field

from weatherdash.schemas.base import BaseSchema


class RegisterRequest(BaseSchema):
    """Registration payload."""
    username: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = None


class LoginRequest(BaseSchema):
    """Login payload."""
    email: Optional[str] = None
    password: Optional[str] = None


class LoginUser(BaseSchema):
    """Public identity returned on login."""
    id: int
    username: str
    email: str


class LoginResponse(BaseSchema):
    """Response schema for a successful login."""
    token: str
    user: LoginUser
