"""Thin httpx client for ``GET /api/matches``."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from app.domain.matching.exceptions import IncompleteProfile, MalformedUpstreamResponse
from app.domain.matching.mapper import map_matched_user
from app.domain.matching.schemas import MatchesPage, PaginationMeta

logger = logging.getLogger(__name__)

MATCHES_PATH = "/api/matches"
PROFILE_INCOMPLETE = "PROFILE_INCOMPLETE"


class MatchesRequestError(Exception):
	"""Any failure to obtain a page other than an incomplete profile."""

	def __init__(self, message: str, *, status_code: Optional[int] = None, code: Optional[str] = None) -> None:
		super().__init__(message)
		self.message = message
		self.status_code = status_code
		self.code = code


def _error_body(response: httpx.Response) -> Mapping[str, Any]:
	try:
		body = response.json()
	except ValueError:
		return {}
	error = body.get("error") if isinstance(body, Mapping) else None
	return error if isinstance(error, Mapping) else {}


def parse_matches_page(body: Any) -> MatchesPage:
	if not isinstance(body, Mapping) or not isinstance(body.get("data"), list):
		raise MalformedUpstreamResponse("Invalid matches payload")
	pagination = body.get("pagination")
	if not isinstance(pagination, Mapping):
		raise MalformedUpstreamResponse("Invalid matches payload")
	try:
		meta = PaginationMeta(**pagination)
	except (TypeError, ValueError):
		raise MalformedUpstreamResponse("Invalid pagination metadata") from None
	return MatchesPage(data=[map_matched_user(item) for item in body["data"]], pagination=meta)


class MatchesApiClient:
	"""Fetches pages of matches over HTTP.

	The caller owns ``http_client`` (base URL, auth headers, transport); this
	class only builds the request and interprets the response.
	"""

	def __init__(self, http_client: httpx.AsyncClient) -> None:
		self._http = http_client

	async def fetch_page(self, limit: int, offset: int) -> MatchesPage:
		try:
			response = await self._http.get(MATCHES_PATH, params={"limit": limit, "offset": offset})
		except httpx.HTTPError as exc:
			raise MatchesRequestError(f"Transport error: {exc}") from exc

		if response.status_code != 200:
			error = _error_body(response)
			if error.get("details") == PROFILE_INCOMPLETE:
				raise IncompleteProfile(str(error.get("message") or PROFILE_INCOMPLETE))
			raise MatchesRequestError(
				str(error.get("message") or f"HTTP error! status: {response.status_code}"),
				status_code=response.status_code,
				code=error.get("code"),
			)

		try:
			return parse_matches_page(response.json())
		except (ValueError, MalformedUpstreamResponse) as exc:
			raise MatchesRequestError("Invalid response from matches endpoint", status_code=response.status_code) from exc
