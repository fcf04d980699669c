"""
Access JWT issuance and verification.

RS256 is used when both keys are configured, HS256 with ``jwt_secret``
otherwise. Keys provided via env with literal ``\\n`` sequences are accepted.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import jwt

from config import JWTSettings
from shared.datetime_utils import utc_now


def _keys(settings: JWTSettings) -> tuple[Any, Any]:
    if settings.use_rs256:
        private_key = settings.jwt_private_key.replace("\\n", "\n").encode("utf-8")
        public_key = settings.jwt_public_key.replace("\\n", "\n").encode("utf-8")
        return private_key, public_key
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET must be set when RS256 keys are not provided")
    return settings.jwt_secret, settings.jwt_secret


def _algorithm(settings: JWTSettings) -> str:
    return "RS256" if settings.use_rs256 else "HS256"


def generate_access_jwt(
    settings: JWTSettings, user_id: str, auth_method: str = "pwd"
) -> str:
    """Issue a short-lived access token for *user_id*.

    ``amr`` records how the user authenticated (``pwd`` or ``mlink``).
    """
    private_key, _ = _keys(settings)
    now = utc_now()
    claims = {
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=settings.access_token_ttl_seconds)).timestamp()),
        "amr": [auth_method],
    }
    return jwt.encode(claims, private_key, algorithm=_algorithm(settings))


def verify_access_jwt(settings: JWTSettings, token: str) -> dict:
    """Decode and validate *token*; raises ``jwt.InvalidTokenError`` on failure."""
    _, public_key = _keys(settings)
    return jwt.decode(
        token,
        public_key,
        algorithms=[_algorithm(settings)],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )
