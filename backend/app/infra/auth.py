"""Authentication helpers for FastAPI endpoints.

The auth provider issues HS256 access tokens; this module only verifies them and
exposes the caller's identity. Dev headers are respected in development only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.infra import jwt as jwt_helper
from app.settings import settings

AUTH_REQUIRED = "Authentication required"


@dataclass(slots=True)
class AuthenticatedUser:
	id: str
	email: Optional[str] = None
	roles: Tuple[str, ...] = ()
	session_id: Optional[str] = None


_bearer_scheme = HTTPBearer(auto_error=False)


def verify_access_jwt(token: str) -> AuthenticatedUser:
	"""Decode and validate an access JWT and return an AuthenticatedUser.

	- required claims: sub, exp, iat, iss, aud
	- roles can be list[str] or comma-separated string (``role`` is accepted too).
	"""
	try:
		payload = jwt_helper.decode_access(token)
	except Exception:
		# Normalise all decode failures for the API surface
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTH_REQUIRED)

	sub = str(payload.get("sub") or "").strip()
	if not sub:
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTH_REQUIRED)

	email = payload.get("email")
	roles_claim = payload.get("roles") or payload.get("role")
	roles: Tuple[str, ...]
	if isinstance(roles_claim, (list, tuple)):
		roles = tuple(str(r).strip() for r in roles_claim if str(r).strip())
	elif isinstance(roles_claim, str):
		roles = tuple(part.strip() for part in roles_claim.split(",") if part.strip())
	else:
		roles = ()

	session_id = payload.get("session_id") or payload.get("sid")

	return AuthenticatedUser(
		id=sub,
		email=str(email) if email is not None else None,
		roles=roles,
		session_id=str(session_id).strip() if session_id is not None else None,
	)


async def get_current_user(
	x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
	credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> AuthenticatedUser:
	"""Resolve the authenticated user.

	In development we allow a plain X-User-Id header. In all other environments
	headers are ignored and a valid Bearer JWT is required.
	"""
	if credentials and credentials.scheme.lower() == "bearer":
		return verify_access_jwt(credentials.credentials)

	if settings.is_dev() and x_user_id and x_user_id.strip():
		return AuthenticatedUser(id=x_user_id.strip())

	raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTH_REQUIRED)
