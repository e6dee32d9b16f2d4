"""
User accounts and their role assignments.
"""
import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from pizza_service.db.base import Base


class Role(str, enum.Enum):
    """The three kinds of role a user can hold."""
    DINER = "diner"
    FRANCHISEE = "franchisee"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    created_at = Column(DateTime, server_default=func.now())

    roles = relationship(
        "UserRole",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserRole.id",
    )
    auth_tokens = relationship("AuthToken", back_populates="user", cascade="all, delete-orphan")


class UserRole(Base):
    """
    A role held by a user.

    For franchisees `object_id` holds the id of the franchise the role applies to.
    """
    __tablename__ = "user_role"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(50), nullable=False)
    object_id = Column(Integer, nullable=True, index=True)

    user = relationship("User", back_populates="roles")
