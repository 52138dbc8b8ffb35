"""User lookups and registration."""

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from storefront.core.security import get_password_hash
from storefront.models.user import User, normalize_user_role


class UserExistsError(Exception):
    """Raised when the username or e-mail is already registered."""


def get_user_by_login(db: Session, login: str) -> User | None:
    """Find a user by username or e-mail (case-insensitive for e-mail)."""
    login = login.strip()
    return db.scalar(
        select(User).where(or_(User.username == login, func.lower(User.email) == login.lower())).limit(1)
    )


def create_user(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    role: str = "CUSTOMER",
    name: str | None = None,
    phone: str | None = None,
) -> User:
    username = username.strip()
    email = email.strip().lower()
    clash = db.scalar(
        select(User.id).where(or_(User.username == username, func.lower(User.email) == email)).limit(1)
    )
    if clash is not None:
        raise UserExistsError("Username or email already registered")

    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(password),
        role=normalize_user_role(role),
        name=name,
        phone=phone,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def list_users(db: Session) -> list[User]:
    return list(db.scalars(select(User).order_by(User.created_at.desc(), User.id.desc())).all())
