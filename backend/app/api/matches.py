"""Matches endpoint: paginated candidates for the current user."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from app.api.errors import ApiError, ApiErrorCode
from app.api.pagination import matches_window_from_query
from app.domain.matching import IncompleteProfile, MatchesPage, MatchesService, ValidationError, get_matches_service
from app.infra.auth import AuthenticatedUser, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

PROFILE_INCOMPLETE = "PROFILE_INCOMPLETE"


@router.get("/matches", response_model=MatchesPage)
async def list_matches(
	request: Request,
	auth_user: AuthenticatedUser = Depends(get_current_user),
	service: MatchesService = Depends(get_matches_service),
) -> MatchesPage:
	"""Return potential matches by location and sports.

	Supports pagination via ``limit`` (1-100, default 20) and ``offset`` (default 0).
	"""
	try:
		window = matches_window_from_query(request.query_params)
	except ValidationError as exc:
		raise ApiError(ApiErrorCode.VALIDATION_ERROR, "Invalid query parameters", exc.to_details()) from None

	try:
		return await service.get_matches(auth_user.id, window.limit, window.offset)
	except IncompleteProfile:
		raise ApiError(
			ApiErrorCode.VALIDATION_ERROR,
			"Your profile must have a location and default range set to find matches",
			PROFILE_INCOMPLETE,
		) from None
	except Exception:
		logger.exception("matches_fetch_failed", extra={"limit": window.limit, "offset": window.offset})
		raise ApiError(
			ApiErrorCode.INTERNAL_ERROR,
			"An unexpected error occurred while finding matches",
			"INTERNAL_SERVER_ERROR",
		) from None
