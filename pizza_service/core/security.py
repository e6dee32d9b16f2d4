"""
Security utilities for password hashing, JWT handling and session tracking.

Issued tokens are tracked in the `auth` table by their signature segment.
A token is only honoured while its row exists, so logging out revokes it
even though the JWT itself would still verify.
"""
from datetime import datetime, timedelta, timezone
from typing import Any
import secrets

import bcrypt
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from pizza_service.core.config import get_settings
from pizza_service.models.auth_token import AuthToken

settings = get_settings()


# bcrypt refuses passwords longer than this
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Over-long passwords never match."""
    encoded = plain_password.encode('utf-8')
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed_password.encode('utf-8'))


def create_access_token(claims: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT carrying the given user claims.

    Every token gets a random `jti`, so two logins by the same user in the
    same second still produce distinct, independently revocable tokens.
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = dict(claims)
    if "id" in to_encode:
        to_encode["sub"] = str(to_encode["id"])
    to_encode["jti"] = secrets.token_hex(16)
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Decode and validate a JWT token. Returns payload or None if invalid."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


def token_signature(token: str) -> str:
    """Return the signature (third) segment of a JWT, or '' if there is none."""
    parts = token.split(".")
    if len(parts) > 2:
        return parts[2]
    return ""


def issue_token(user_id: int, token: str, db: Session) -> None:
    """
    Record a freshly issued token as logged in.

    Args:
        user_id: Owner of the token
        token: The JWT token string
        db: Database session
    """
    db.merge(AuthToken(token=token_signature(token), user_id=user_id))
    db.commit()


def is_token_valid(token: str, db: Session) -> bool:
    """
    Check whether a token is still logged in.

    Args:
        token: The JWT token string
        db: Database session

    Returns:
        True if a session row exists for the token's signature
    """
    signature = token_signature(token)
    if not signature:
        return False

    return db.get(AuthToken, signature) is not None


def revoke_token(token: str, db: Session) -> None:
    """
    Log a token out. Revoking an unknown or already revoked token is a no-op.

    Args:
        token: The JWT token string to revoke
        db: Database session
    """
    db.query(AuthToken).filter(
        AuthToken.token == token_signature(token)
    ).delete(synchronize_session=False)
    db.commit()
