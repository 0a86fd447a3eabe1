"""Gateway to the database-side matching function.

Distance and sport-overlap ranking live entirely inside
``get_matches_for_user``; this layer only passes the caller's identity and
window through, recognises the "profile incomplete" error code and validates
the shape of what comes back.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Optional

from app.domain.matching.exceptions import IncompleteProfile, InvalidArgument, MalformedUpstreamResponse
from app.domain.matching.mapper import map_matched_user
from app.domain.matching.schemas import DEFAULT_LIMIT, DEFAULT_OFFSET, MatchesPage, PaginationMeta
from app.infra.postgres import get_pool
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

MatchingFunction = Callable[[str, int, int], Awaitable[Any]]

# SQLSTATE raised by the function when location/default_range_km are missing;
# PostgREST surfaces the same condition as PGRST400.
INCOMPLETE_PROFILE_CODES = frozenset({"PT400", "PGRST400"})

_MATCHES_SQL = """
SELECT get_matches_for_user(
	current_user_id => $1::uuid,
	page_limit => $2,
	page_offset => $3
) AS result
"""


async def call_matching_function(user_id: str, limit: int, offset: int) -> Any:
	"""Run the stored procedure and return its decoded JSON payload."""
	pool = await get_pool()
	async with pool.acquire() as conn:
		raw = await conn.fetchval(_MATCHES_SQL, user_id, limit, offset)
	if isinstance(raw, (str, bytes)):
		return json.loads(raw)
	return raw


def error_code(exc: BaseException) -> Optional[str]:
	"""Extract a database/PostgREST error code from an exception, if any."""
	for attr in ("sqlstate", "code"):
		value = getattr(exc, attr, None)
		if value:
			return str(value)
	return None


def _unwrap_result(data: Any) -> Mapping[str, Any]:
	# Table-returning variants yield a single row wrapping the payload.
	if isinstance(data, list) and len(data) == 1:
		data = data[0]
	if not isinstance(data, Mapping):
		raise MalformedUpstreamResponse("Invalid response format from matches function")
	return data


def _total_count(result: Mapping[str, Any]) -> int:
	total = result.get("total_count")
	if isinstance(total, bool) or not isinstance(total, (int, float)) or total < 0:
		raise MalformedUpstreamResponse("Invalid response format from matches function")
	if isinstance(total, float) and not total.is_integer():
		raise MalformedUpstreamResponse("Invalid response format from matches function")
	return int(total)


class MatchesService:
	"""Fetches one page of matches for a user.

	The matching function is injected so callers (and tests) can swap the
	database-backed implementation.
	"""

	def __init__(self, matching_function: MatchingFunction = call_matching_function) -> None:
		self._matching_function = matching_function

	async def get_matches(self, user_id: str, limit: int = DEFAULT_LIMIT, offset: int = DEFAULT_OFFSET) -> MatchesPage:
		if not user_id:
			raise InvalidArgument("User ID is required")

		try:
			data = await self._matching_function(user_id, limit, offset)
		except Exception as exc:
			if error_code(exc) in INCOMPLETE_PROFILE_CODES:
				obs_metrics.inc_matches_query("incomplete_profile")
				logger.info("matches_profile_incomplete", extra={"code": error_code(exc)})
				raise IncompleteProfile("Profile is incomplete: location and default_range_km are required") from exc
			obs_metrics.inc_matches_query("error")
			raise

		try:
			result = _unwrap_result(data)
			total = _total_count(result)
			matched_users = result.get("matched_users")
			if not isinstance(matched_users, list):
				raise MalformedUpstreamResponse("Invalid response format from matches function")
			if len(matched_users) > limit:
				logger.warning("matches_page_overflow", extra={"limit": limit, "returned": len(matched_users)})
				matched_users = matched_users[:limit]
			users = [map_matched_user(item) for item in matched_users]
		except MalformedUpstreamResponse:
			obs_metrics.inc_matches_query("malformed")
			logger.warning("matches_malformed_response", extra={"limit": limit, "offset": offset})
			raise

		obs_metrics.inc_matches_query("ok")
		obs_metrics.observe_matches_results(len(users))
		return MatchesPage(
			data=users,
			pagination=PaginationMeta(total=total, limit=limit, offset=offset),
		)


def get_matches_service() -> MatchesService:
	"""FastAPI dependency returning the database-backed service."""
	return MatchesService()
