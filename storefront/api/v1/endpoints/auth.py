"""Authentication endpoints: session login plus bearer tokens for API clients."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from storefront.auth import current_user, login_session, logout_session
from storefront.core.security import create_access_token
from storefront.db.session import get_db
from storefront.models import User
from storefront.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from storefront.services.account_service import authenticate_user
from storefront.services.user_service import UserExistsError, create_user

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, request: Request, db: Session = Depends(get_db)) -> User:
    try:
        user = create_user(
            db,
            username=payload.username,
            email=payload.email,
            password=payload.password,
            name=payload.name,
            phone=payload.phone,
        )
    except UserExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    login_session(request, user)
    logger.info("[AUTH] Registered user_id=%s", user.id)
    return user


def _authenticate(db: Session, payload: LoginRequest) -> User:
    user = authenticate_user(db, payload.login, payload.password)
    if user is None:
        logger.info("[AUTH] Failed login for %s", payload.login)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect login or password")
    return user


@router.post("/login", response_model=UserResponse)
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)) -> User:
    user = _authenticate(db, payload)
    login_session(request, user)
    return user


@router.post("/token", response_model=TokenResponse)
def issue_token(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    user = _authenticate(db, payload)
    return TokenResponse(access_token=create_access_token(user.id, {"role": user.role}))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(request: Request) -> None:
    logout_session(request)


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(current_user)) -> User:
    return user
