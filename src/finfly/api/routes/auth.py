"""Auth API endpoints.

POST /auth/register - Create account and return token
POST /auth/login - Exchange credentials for token
GET /auth/me - Current user profile
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from finfly.api.deps import get_db_session
from finfly.api.auth import get_current_user
from finfly.core.accounts import (
    AuthResult,
    InvalidCredentialsError,
    RegistrationError,
    authenticate,
    register_user,
)
from finfly.core.security import AuthenticatedUser
from finfly.db import repo
from finfly.db.repo import DbSession
from finfly.models.domain import UserEntity
from finfly.models.types import AuthResponse, LoginRequest, RegisterRequest, UserPublic

router = APIRouter()


def _user_public(user: UserEntity) -> UserPublic:
    return UserPublic(
        id=user.user_id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
    )


def _auth_response(message: str, result: AuthResult) -> AuthResponse:
    return AuthResponse(message=message, token=result.token, user=_user_public(result.user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    session: DbSession = Depends(get_db_session),
) -> AuthResponse:
    """Register a new user.

    Raises:
        HTTPException: 400 if input is invalid or the email is taken.
    """
    try:
        result = register_user(session, payload.name, payload.email, payload.password)
    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return _auth_response("User registered successfully", result)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    session: DbSession = Depends(get_db_session),
) -> AuthResponse:
    """Log in with email and password.

    Raises:
        HTTPException: 401 on unknown email or wrong password.
    """
    try:
        result = authenticate(session, payload.email, payload.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e

    return _auth_response("Login successful", result)


@router.get("/me", response_model=UserPublic)
def me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    session: DbSession = Depends(get_db_session),
) -> UserPublic:
    """Get the authenticated user's profile."""
    user = repo.get_user(session, current_user.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return _user_public(user)
