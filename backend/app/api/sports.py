"""Sports taxonomy and the current user's sports."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.api.errors import ApiError, ApiErrorCode
from app.api.pagination import parse_int_prefix
from app.domain.sports import service as sports_service
from app.domain.sports import user_sports
from app.domain.sports.exceptions import DuplicateSport, SportNotFound, UserSportNotFound
from app.domain.sports.schemas import AddUserSportCommand, SportOut, UpdateUserSportCommand, UserSportOut
from app.infra.auth import AuthenticatedUser, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

SPORTS_CACHE_CONTROL = "public, max-age=3600"


def _sport_id(raw: str) -> int:
	sport_id = parse_int_prefix(raw)
	if sport_id is None or sport_id < 1:
		raise ApiError(
			ApiErrorCode.VALIDATION_ERROR,
			"Invalid request data",
			[{"path": ["sport_id"], "message": "Sport ID must be a valid positive number", "type": "value_error"}],
		)
	return sport_id


@router.get("/sports", response_model=List[SportOut])
async def list_sports(
	response: Response,
	_: AuthenticatedUser = Depends(get_current_user),
) -> List[SportOut]:
	try:
		sports = await sports_service.list_sports()
	except Exception:
		logger.exception("sports_fetch_failed")
		raise ApiError(ApiErrorCode.INTERNAL_ERROR, "Failed to fetch sports") from None
	response.headers["Cache-Control"] = SPORTS_CACHE_CONTROL
	return sports


@router.get("/profiles/me/sports", response_model=List[UserSportOut])
async def list_my_sports(auth_user: AuthenticatedUser = Depends(get_current_user)) -> List[UserSportOut]:
	try:
		return await user_sports.list_user_sports(auth_user.id)
	except Exception:
		logger.exception("user_sports_fetch_failed")
		raise ApiError(ApiErrorCode.INTERNAL_ERROR, "An error occurred while fetching user sports") from None


@router.post("/profiles/me/sports", response_model=UserSportOut, status_code=status.HTTP_201_CREATED)
async def add_my_sport(
	payload: AddUserSportCommand,
	auth_user: AuthenticatedUser = Depends(get_current_user),
) -> UserSportOut:
	try:
		return await user_sports.add_user_sport(auth_user.id, payload)
	except SportNotFound as exc:
		raise ApiError(ApiErrorCode.NOT_FOUND, exc.message) from None
	except DuplicateSport as exc:
		raise ApiError(ApiErrorCode.VALIDATION_ERROR, exc.message) from None
	except Exception:
		logger.exception("user_sport_add_failed", extra={"sport_id": payload.sport_id})
		raise ApiError(ApiErrorCode.INTERNAL_ERROR, "An error occurred while adding sport to user profile") from None


@router.put("/profiles/me/sports/{sport_id}", response_model=UserSportOut)
async def update_my_sport(
	sport_id: str,
	payload: UpdateUserSportCommand,
	auth_user: AuthenticatedUser = Depends(get_current_user),
) -> UserSportOut:
	parsed_id = _sport_id(sport_id)
	try:
		return await user_sports.update_user_sport(auth_user.id, parsed_id, payload)
	except UserSportNotFound as exc:
		raise ApiError(ApiErrorCode.NOT_FOUND, exc.message) from None
	except Exception:
		logger.exception("user_sport_update_failed", extra={"sport_id": parsed_id})
		raise ApiError(ApiErrorCode.INTERNAL_ERROR, "An error occurred while updating the sport") from None


@router.delete("/profiles/me/sports/{sport_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_sport(
	sport_id: str,
	auth_user: AuthenticatedUser = Depends(get_current_user),
) -> Response:
	parsed_id = _sport_id(sport_id)
	try:
		await user_sports.delete_user_sport(auth_user.id, parsed_id)
	except UserSportNotFound:
		raise ApiError(ApiErrorCode.NOT_FOUND, "Sport not found in user's profile", UserSportNotFound.reason) from None
	except Exception:
		logger.exception("user_sport_delete_failed", extra={"sport_id": parsed_id})
		raise ApiError(
			ApiErrorCode.INTERNAL_ERROR,
			"An unexpected error occurred while deleting the sport",
			"INTERNAL_SERVER_ERROR",
		) from None
	return Response(status_code=status.HTTP_204_NO_CONTENT)
