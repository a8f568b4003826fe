"""User registration and login.

Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from finfly.core.security import create_access_token, hash_password, verify_password
from finfly.db import repo
from finfly.db.repo import DbSession
from finfly.models.domain import UserEntity

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class RegistrationError(ValueError):
    """Raised when registration input is rejected."""


class DuplicateEmailError(RegistrationError):
    """Raised when the email is already registered."""


class InvalidCredentialsError(ValueError):
    """Raised when login email/password do not match an account."""


@dataclass
class AuthResult:
    """A user together with a freshly issued access token."""

    user: UserEntity
    token: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(session: DbSession, name: str, email: str, password: str) -> AuthResult:
    """Create an account and issue a token.

    Raises:
        RegistrationError: If name or password are unusable.
        DuplicateEmailError: If the email is already taken.
    """
    name = (name or "").strip()
    email = normalize_email(email)

    if not name:
        raise RegistrationError("Name is required")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise RegistrationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if repo.get_user_by_email(session, email) is not None:
        raise DuplicateEmailError("Email already registered")

    entity = UserEntity(
        user_id=str(uuid.uuid4()),
        name=name,
        email=email,
        password_hash=hash_password(password),
    )
    try:
        user = repo.create_user(session, entity)
        repo.commit(session)
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        session.rollback()
        raise DuplicateEmailError("Email already registered") from e

    logger.info("user_registered user_id=%s", user.user_id)
    return AuthResult(user=user, token=create_access_token(user.user_id, user.email))


def authenticate(session: DbSession, email: str, password: str) -> AuthResult:
    """Check credentials and issue a token.

    Unknown email and wrong password raise the same error.
    """
    email = normalize_email(email)
    user = repo.get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("login_failed email_known=%s", user is not None)
        raise InvalidCredentialsError("Invalid email or password")

    logger.info("login_succeeded user_id=%s", user.user_id)
    return AuthResult(user=user, token=create_access_token(user.user_id, user.email))
