"""
Auth-related Pydantic schemas for request/response validation.
"""
from typing import Optional

from pydantic import EmailStr, field_validator

from pizza_service.schemas.base import CamelModel
from pizza_service.schemas.user import UserResponse, check_password_length


class UserRegister(CamelModel):
    """
    Schema for user registration request.

    All fields are optional here so the router can answer a missing field
    with a single, readable message.
    """
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    password_length = field_validator("password")(check_password_length)


class UserLogin(CamelModel):
    """Schema for user login request."""
    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    """User plus the bearer token that was issued for them."""
    user: UserResponse
    token: str
