"""
User Pydantic schemas.
"""
from typing import List, Optional

from pydantic import EmailStr, field_validator

from pizza_service.core.security import MAX_PASSWORD_BYTES
from pizza_service.schemas.base import CamelModel


def check_password_length(password: Optional[str]) -> Optional[str]:
    if password is not None and len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return password


class RoleResponse(CamelModel):
    role: str
    object_id: Optional[int] = None


class UserResponse(CamelModel):
    """Schema for user response (without password)."""
    id: int
    name: str
    email: str
    roles: List[RoleResponse]


class UserUpdate(CamelModel):
    """Fields a user may change on their own profile."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    password_length = field_validator("password")(check_password_length)


class UserListResponse(CamelModel):
    users: List[UserResponse]
    more: bool
