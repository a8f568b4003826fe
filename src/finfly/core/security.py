"""Password hashing and access tokens.

Passwords are hashed with bcrypt. Access tokens are HS256 JWTs carrying
the user id in ``sub`` and the email in ``email``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from finfly import config

JWT_ALGORITHM = "HS256"


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be trusted."""


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity extracted from a verified token."""

    user_id: str
    email: str


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(
    user_id: str,
    email: str,
    *,
    expires_minutes: int | None = None,
    now: datetime | None = None,
) -> str:
    """Issue a signed access token.

    Args:
        user_id: Subject of the token.
        email: Email stored alongside the subject.
        expires_minutes: Lifetime override; defaults to configuration.
        now: Issue time override.

    Returns:
        Encoded JWT string.
    """
    if expires_minutes is None:
        expires_minutes = config.jwt_expires_minutes()
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, config.jwt_secret(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> AuthenticatedUser:
    """Verify signature and expiry and extract the identity.

    Raises:
        InvalidTokenError: If the token is malformed, expired, signed with
            another secret, or lacks the required claims.
    """
    try:
        payload = jwt.decode(
            token,
            config.jwt_secret(),
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token expired") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid token") from e

    user_id = payload.get("sub")
    email = payload.get("email")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenError("Invalid token")
    return AuthenticatedUser(user_id=user_id, email=email if isinstance(email, str) else "")
