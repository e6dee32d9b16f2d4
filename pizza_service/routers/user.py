"""
User router: profile lookup and update, plus admin user management.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pizza_service.core.deps import get_current_user
from pizza_service.core.permissions import Action, require
from pizza_service.db.session import get_db
from pizza_service.models.user import User
from pizza_service.schemas.auth import AuthResponse
from pizza_service.schemas.base import MessageResponse
from pizza_service.schemas.user import UserListResponse, UserResponse, UserUpdate
from pizza_service.services.users import UserService

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)) -> User:
    """
    Get the current authenticated user's profile.
    """
    return current_user


@router.get("", response_model=UserListResponse)
def list_users(
    page: int = Query(0, ge=0, description="0-based page number"),
    limit: int = Query(10, ge=1, le=100),
    name: str = Query("*", description="Name filter, * matches anything"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserListResponse:
    """
    List users. Admin only.
    """
    require(current_user, Action.LIST_USERS)

    users, more = UserService(db).list_users(page=page, limit=limit, name_filter=name)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users], more=more)


@router.put("/{user_id}", response_model=AuthResponse)
def update_user(
    user_id: int,
    update_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> AuthResponse:
    """
    Update a user's name, email or password.

    Users may update themselves; admins may update anyone. A new token
    reflecting the updated profile is issued.
    """
    require(current_user, Action.UPDATE_USER, target=user_id)

    service = UserService(db)
    user = service.update_user(
        user_id,
        name=update_data.name,
        email=update_data.email,
        password=update_data.password,
    )
    token = service.create_session(user)

    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """
    Delete a user along with their roles and sessions. Admin only.
    """
    require(current_user, Action.DELETE_USER, target=user_id)

    UserService(db).delete_user(user_id)
    return MessageResponse(message="user deleted")
