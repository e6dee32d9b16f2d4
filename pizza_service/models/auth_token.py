"""
Auth token model for session tracking.

A JWT is considered logged in only while a row holding its signature exists.
Logout deletes the row, which makes the token unusable even though its claims
are still validly signed.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from pizza_service.db.base import Base


class AuthToken(Base):
    """Signature segment of every currently active JWT."""
    __tablename__ = "auth"

    token = Column(String(512), primary_key=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    issued_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="auth_tokens")
