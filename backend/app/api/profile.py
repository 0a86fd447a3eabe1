"""Current-user profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.errors import ApiError, ApiErrorCode
from app.domain.profiles import service as profile_service
from app.domain.profiles.exceptions import ProfileNotFound
from app.domain.profiles.schemas import ProfileOut, ProfileUpdate
from app.infra.auth import AuthenticatedUser, get_current_user

router = APIRouter(prefix="/api")


def _not_found() -> ApiError:
	return ApiError(ApiErrorCode.NOT_FOUND, "Profile not found", ProfileNotFound.reason)


@router.get("/profiles/me", response_model=ProfileOut)
async def get_me(auth_user: AuthenticatedUser = Depends(get_current_user)) -> ProfileOut:
	profile = await profile_service.get_profile(auth_user.id)
	if profile is None:
		raise _not_found()
	return profile


@router.patch("/profiles/me", response_model=ProfileOut)
async def patch_me(
	payload: ProfileUpdate,
	auth_user: AuthenticatedUser = Depends(get_current_user),
) -> ProfileOut:
	try:
		return await profile_service.update_profile(auth_user.id, payload)
	except ProfileNotFound:
		raise _not_found() from None
