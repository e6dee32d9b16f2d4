"""
Authentication router: register, login and logout.

Register and login both start a session, i.e. issue a JWT and record its
signature in the auth table. Logout deletes that record.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pizza_service.core.deps import get_bearer_token, get_current_user
from pizza_service.core.exceptions import BadRequest
from pizza_service.core.security import revoke_token
from pizza_service.db.session import get_db
from pizza_service.models.user import User
from pizza_service.schemas.auth import AuthResponse, UserLogin, UserRegister
from pizza_service.schemas.base import MessageResponse
from pizza_service.schemas.user import UserResponse
from pizza_service.services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("", response_model=AuthResponse)
def register(user_data: UserRegister, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Register a new diner and log them in.
    """
    if not user_data.name or not user_data.email or not user_data.password:
        raise BadRequest("name, email, and password are required")

    service = UserService(db)
    user = service.add_user(user_data.name, user_data.email, user_data.password)
    token = service.create_session(user)

    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.put("", response_model=AuthResponse)
def login(user_data: UserLogin, db: Session = Depends(get_db)) -> AuthResponse:
    """
    Authenticate an existing user and return a fresh token.
    """
    service = UserService(db)
    user = service.authenticate(user_data.email, user_data.password)
    token = service.create_session(user)

    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.delete("", response_model=MessageResponse)
def logout(
    current_user: User = Depends(get_current_user),
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """
    Revoke the token used to make this request.
    """
    revoke_token(token, db)
    logger.info("Session ended for user %s", current_user.id)
    return MessageResponse(message="logout successful")
