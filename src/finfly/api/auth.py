"""Bearer token gate for protected routes."""

from __future__ import annotations

import logging

from fastapi import Header, HTTPException, status

from finfly.core.security import AuthenticatedUser, InvalidTokenError, decode_access_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_current_user(authorization: str | None = Header(None)) -> AuthenticatedUser:
    """Verify the Authorization header and return the caller's identity.

    Raises:
        HTTPException: 401 if the header is missing, uses another scheme,
            or carries an invalid or expired token.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token not provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[len(BEARER_PREFIX):].strip()
    try:
        return decode_access_token(token)
    except InvalidTokenError as e:
        logger.warning("auth_rejected reason=%s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
