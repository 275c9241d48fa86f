"""Bearer-token helpers.

Sign-in happens in the front-end; this API only verifies the session JWT it
receives and reads the user's email from it.
"""
from __future__ import annotations

from typing import Optional

from jose import JWTError, jwt

from smart_trip.core.errors import UnauthorizedError


def email_from_authorization(
    authorization: Optional[str],
    *,
    secret: Optional[str],
    algorithm: str = "HS256",
) -> str:
    """Return the email claim of a ``Bearer <jwt>`` header.

    Raises:
        UnauthorizedError: when the header is missing, malformed, expired or
            signed with another key, or when no secret is configured.
    """

    if not authorization:
        raise UnauthorizedError("Unauthorized")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Unauthorized")
    if not secret:
        raise UnauthorizedError("Authentication is not configured")

    try:
        claims = jwt.decode(token.strip(), secret, algorithms=[algorithm])
    except JWTError as exc:
        raise UnauthorizedError("Unauthorized") from exc

    email = claims.get("email") or claims.get("sub")
    if not email or "@" not in str(email):
        raise UnauthorizedError("Unauthorized")
    return str(email)
