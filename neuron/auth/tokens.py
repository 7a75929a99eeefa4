"""Signed access tokens (JWT, HS256 by default)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError

from neuron.config import Settings, get_settings
from neuron.exceptions import TOKEN_EXPIRED, TOKEN_INVALID, UnauthenticatedError
from neuron.schemas.auth import TokenClaims


def issue_access_token(
    claims: TokenClaims, settings: Optional[Settings] = None
) -> str:
    """Sign claims with the server secret; exp is set from JWT_EXPIRATION."""
    settings = settings or get_settings()
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=settings.jwt_expiration)
    payload = {
        "sub": str(claims.sub),
        "email": claims.email,
        "role": claims.role,
        "permissions": list(claims.permissions),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> TokenClaims:
    """Verify signature and expiry.

    Raises:
        UnauthenticatedError: token expired, tampered with or malformed.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError(TOKEN_EXPIRED)
    except jwt.InvalidTokenError:
        raise UnauthenticatedError(TOKEN_INVALID)
    try:
        return TokenClaims.model_validate(payload)
    except ValidationError:
        raise UnauthenticatedError(TOKEN_INVALID)
