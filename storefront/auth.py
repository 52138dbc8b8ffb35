"""Request authentication: signed session cookie first, bearer token second."""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.core.security import decode_access_token
from storefront.db.session import get_db
from storefront.models import User

bearer_scheme: HTTPBearer = HTTPBearer(auto_error=False)

SESSION_USER_KEY = "user_id"


def login_session(request: Request, user: User) -> None:
    """Store the user in the session, keeping the cart and language."""
    request.session[SESSION_USER_KEY] = user.id
    request.session["role"] = user.role
    request.session["username"] = user.username


def logout_session(request: Request) -> None:
    for key in (SESSION_USER_KEY, "role", "username"):
        request.session.pop(key, None)


def _user_id_from_token(credentials: HTTPAuthorizationCredentials) -> int:
    payload: dict[str, Any] = decode_access_token(credentials.credentials)
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        ) from exc


def current_user_optional(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Return the signed-in user, or None for anonymous requests."""
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None and credentials is not None:
        user_id = _user_id_from_token(credentials)
    if user_id is None:
        return None

    user = db.get(User, int(user_id))
    if user is None or not user.is_active:
        logout_session(request)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")
    return user


def current_user(user: User | None = Depends(current_user_optional)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    return user


def require_admin(user: User = Depends(current_user)) -> User:
    if user.role != "ADMIN":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    return user
