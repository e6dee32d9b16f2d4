"""
Data access for users, their roles and their sessions.
"""
import logging
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from pizza_service.core.exceptions import BadRequest, NotFound
from pizza_service.core.security import (
    create_access_token,
    hash_password,
    issue_token,
    verify_password,
)
from pizza_service.models.franchise import Franchise
from pizza_service.models.user import Role, User, UserRole
from pizza_service.services.paging import LIKE_ESCAPE, fetch_page, like_pattern

logger = logging.getLogger(__name__)


def user_claims(user: User) -> dict[str, Any]:
    """Public identity of a user as embedded in their JWT."""
    roles = []
    for assignment in user.roles:
        entry: dict[str, Any] = {"role": assignment.role}
        if assignment.object_id is not None:
            entry["objectId"] = assignment.object_id
        roles.append(entry)
    return {"id": user.id, "name": user.name, "email": user.email, "roles": roles}


class UserService:
    """
    Queries and mutations on user accounts.
    """

    def __init__(self, db: Session):
        self.db = db

    def add_user(
        self,
        name: str,
        email: str,
        password: str,
        roles: Optional[Iterable[Tuple[Role, Optional[str]]]] = None,
    ) -> User:
        """
        Create a user with the given roles (diner when none are given).

        A franchisee role names its franchise, which must already exist.
        """
        user = User(name=name, email=email, password=hash_password(password))
        for role, franchise_name in roles or [(Role.DINER, None)]:
            object_id = None
            if role == Role.FRANCHISEE:
                franchise = self.db.query(Franchise).filter(Franchise.name == franchise_name).first()
                if franchise is None:
                    raise NotFound(f"unknown franchise {franchise_name}")
                object_id = franchise.id
            user.roles.append(UserRole(role=role.value, object_id=object_id))

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """
        Find the account the credentials belong to.

        An email may be shared by several accounts; the oldest one whose
        password matches wins.
        """
        candidates = self.db.query(User).filter(User.email == email).order_by(User.id.asc())
        for user in candidates:
            if verify_password(password, user.password):
                return user
        raise NotFound("unknown user")

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("unknown user")
        return user

    def create_session(self, user: User) -> str:
        """Issue a JWT for the user and record it as logged in."""
        token = create_access_token(user_claims(user))
        issue_token(user.id, token, self.db)
        logger.info("Session started for user %s", user.id)
        return token

    def update_user(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """Apply the provided profile fields; fields left as None are unchanged."""
        if name is None and email is None and password is None:
            raise BadRequest("name, email, or password is required")

        user = self.get_user(user_id)

        if email is not None:
            user.email = email
        if name is not None:
            user.name = name
        if password is not None:
            user.password = hash_password(password)

        self.db.commit()
        self.db.refresh(user)
        return user

    def list_users(self, page: int = 0, limit: int = 10, name_filter: str = "*") -> Tuple[List[User], bool]:
        query = (
            self.db.query(User)
            .filter(User.name.like(like_pattern(name_filter), escape=LIKE_ESCAPE))
            .order_by(User.id.asc())
        )
        return fetch_page(query, page, limit)

    def delete_user(self, user_id: int) -> None:
        user = self.get_user(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted user %s", user_id)
