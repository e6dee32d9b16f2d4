"""
Schema creation and first-start bootstrap.
"""
import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from pizza_service.core.config import get_settings
from pizza_service.core.security import hash_password
from pizza_service.db.base import Base
from pizza_service.models.user import Role, User, UserRole

# Register every model on Base.metadata
import pizza_service.models  # noqa: F401

logger = logging.getLogger(__name__)


def bootstrap_default_admin(db: Session) -> Optional[User]:
    """
    Create the default admin if the user table is empty.

    Returns the new admin, or None when users already exist.
    """
    if db.query(User).first() is not None:
        return None

    settings = get_settings()
    admin = User(
        name=settings.DEFAULT_ADMIN_NAME,
        email=settings.DEFAULT_ADMIN_EMAIL,
        password=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
    )
    admin.roles.append(UserRole(role=Role.ADMIN.value))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Created default admin %s", admin.email)
    return admin


def init_db(engine: Engine) -> None:
    """Create missing tables and seed the default admin."""
    Base.metadata.create_all(bind=engine)
    with Session(engine) as db:
        bootstrap_default_admin(db)
