"""Admin bootstrap and credential checks."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.security import get_password_hash, verify_password
from storefront.models import User
from storefront.services.user_service import get_user_by_login

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "123"


def ensure_default_admin(db: Session) -> bool:
    """Make sure at least one active administrator can log in.

    Uses ``ADMIN_USER``/``ADMIN_PASS`` when both are set, otherwise falls back
    to ``admin``/``123`` and logs a warning.

    Returns:
        bool: True when the admin account already existed.
    """
    username = settings.admin_user.strip() or DEFAULT_ADMIN_USERNAME
    password = settings.admin_pass or DEFAULT_ADMIN_PASSWORD

    existing = db.scalar(select(User).where(User.username == username).limit(1))
    if existing is not None:
        if not existing.is_active or existing.role != "ADMIN":
            existing.is_active = True
            existing.role = "ADMIN"
            db.commit()
            logger.info("[BOOTSTRAP] Admin %s re-activated.", username)
        return True

    db.add(
        User(
            username=username,
            email=f"{username}@localhost",
            password_hash=get_password_hash(password),
            name="Administrator",
            role="ADMIN",
            is_active=True,
        )
    )
    db.commit()
    if password == DEFAULT_ADMIN_PASSWORD:
        logger.warning("[SECURITY] Default admin account created: %s/%s. Change it immediately.", username, password)
    else:
        logger.info("[BOOTSTRAP] Admin account %s created from environment.", username)
    return False


def authenticate_user(db: Session, login: str, password: str) -> User | None:
    user = get_user_by_login(db, login)
    if user is None or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user
