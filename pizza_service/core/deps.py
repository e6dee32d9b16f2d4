"""
Request dependencies that resolve the caller from the bearer token.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pizza_service.core.exceptions import Unauthorized
from pizza_service.core.security import decode_token, is_token_valid
from pizza_service.db.session import get_db
from pizza_service.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Raw token from the Authorization header, if one was sent."""
    if credentials is None:
        return None
    return credentials.credentials


def get_optional_user(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Resolve the caller, or None for anonymous requests.

    The session table is consulted before the claims are trusted, so a
    logged-out token resolves to nobody even though it still verifies.
    """
    if not token or not is_token_valid(token, db):
        return None

    payload = decode_token(token)
    if payload is None:
        return None

    user_id = payload.get("id")
    if user_id is None:
        return None

    return db.get(User, user_id)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Require an authenticated caller."""
    if user is None:
        raise Unauthorized()
    return user
