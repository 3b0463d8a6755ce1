"""Bearer JWT verification for the booking API.

Tokens are issued by the identity service; this module only verifies them.

Provides:
- verify_token(): Validates a JWT and returns its claims
- get_current_user(): FastAPI dependency for the authenticated user
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import jwt
from fastapi import HTTPException, Request


@dataclass
class CurrentUser:
    """Authenticated user context."""

    id: int
    email: str | None
    name: str | None


def _get_settings() -> dict[str, str | None]:
    """Load JWT settings from environment."""
    return {
        "secret": os.environ.get("JWT_SECRET"),
        "issuer": os.environ.get("JWT_ISSUER") or None,
        "audience": os.environ.get("JWT_AUDIENCE") or None,
    }


def verify_token(token: str) -> dict[str, Any]:
    """Verify an HS256 JWT and return its claims.

    Issuer and audience are checked only when configured.

    Raises:
        HTTPException: 401 if the token is invalid or auth is not configured.
    """
    settings = _get_settings()
    secret = settings["secret"]
    if not secret:
        raise HTTPException(status_code=401, detail="Auth not configured")

    required = ["exp"]
    if settings["issuer"]:
        required.append("iss")
    if settings["audience"]:
        required.append("aud")

    try:
        return jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            issuer=settings["issuer"],
            audience=settings["audience"],
            options={"require": required},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")


def _user_id_from_claims(claims: dict[str, Any]) -> int:
    raw = claims.get("sub") or claims.get("userId")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")


def _extract_bearer_token(request: Request) -> str:
    """Extract Bearer token from Authorization header.

    Raises:
        HTTPException: 401 if header missing or malformed.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid authorization header")

    return parts[1]


def get_current_user(request: Request) -> CurrentUser:
    """FastAPI dependency: get authenticated user from the bearer token."""
    claims = verify_token(_extract_bearer_token(request))
    return CurrentUser(
        id=_user_id_from_claims(claims),
        email=claims.get("email"),
        name=claims.get("name"),
    )
