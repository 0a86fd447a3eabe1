"""Centralised JWT helpers for access tokens.

Tokens are minted by the external auth provider and signed with HS256 using the
shared secret. We validate standard claims and the expected issuer/audience.
"""

from __future__ import annotations

import time
from typing import Any, Dict

import jwt
from jwt import InvalidTokenError

from app.settings import settings


def encode_access(payload: dict[str, object], *, ttl_seconds: int = 3600) -> str:
    """Encode an access token with issuer/audience/expiry defaults.

    Only used by tests and local tooling; production tokens come from the provider.
    """
    now = int(time.time())
    body: Dict[str, Any] = {
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + ttl_seconds,
    }
    body.update(payload)
    return jwt.encode(body, settings.secret_key, algorithm="HS256")


def decode_access(token: str) -> dict[str, object]:
    """Decode and validate an access token.

    Raises jwt.InvalidTokenError subclasses on failure.
    """
    options = {"require": ["exp", "iat", "iss", "aud", "sub"]}
    payload = jwt.decode(
        token,
        settings.secret_key,
        algorithms=["HS256"],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        leeway=5,
        options=options,
    )
    if not str(payload.get("sub") or "").strip():
        raise InvalidTokenError("missing_claim:sub")
    return payload  # type: ignore[return-value]
