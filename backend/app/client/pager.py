"""Accumulated match results for one client session.

``MatchesPager`` keeps every page fetched so far and knows whether another one
exists. Each instance belongs to a single session; create one per view.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Protocol

from app.client.api import MatchesRequestError
from app.domain.matching.exceptions import IncompleteProfile
from app.domain.matching.schemas import MatchedUser, MatchesPage, PaginationMeta
from app.settings import settings

logger = logging.getLogger(__name__)


class PageSource(Protocol):
	async def fetch_page(self, limit: int, offset: int) -> MatchesPage: ...


class MatchesError(str, Enum):
	NO_LOCATION = "no_location"
	GENERIC = "generic"


class PagerState(str, Enum):
	IDLE = "idle"
	LOADING = "loading"
	LOADED = "loaded"
	LOADING_MORE = "loading_more"
	ERRORED = "errored"


class MatchesPager:
	def __init__(self, source: PageSource, *, page_size: Optional[int] = None) -> None:
		self._source = source
		self.page_size = page_size or settings.matches_page_size
		self._token = 0
		self._reset_fields()

	def _reset_fields(self) -> None:
		self.items: list[MatchedUser] = []
		self.pagination: Optional[PaginationMeta] = None
		self.is_loading_initial = False
		self.is_loading_more = False
		self.error: Optional[MatchesError] = None
		self.load_more_error: Optional[str] = None

	@property
	def has_next_page(self) -> bool:
		return self.pagination is not None and self.pagination.has_next_page

	@property
	def state(self) -> PagerState:
		if self.is_loading_initial:
			return PagerState.LOADING
		if self.error is not None:
			return PagerState.ERRORED
		if self.is_loading_more:
			return PagerState.LOADING_MORE
		if self.pagination is not None:
			return PagerState.LOADED
		return PagerState.IDLE

	def reset(self) -> None:
		"""Back to idle; responses still in flight are ignored."""
		self._token += 1
		self._reset_fields()

	async def fetch_first_page(self) -> None:
		"""(Re)load from offset 0, replacing everything accumulated so far.

		Overlapping calls are resolved by request token: only the most recent
		call may write state.
		"""
		self._token += 1
		token = self._token
		self.is_loading_initial = True
		self.is_loading_more = False
		self.error = None
		self.load_more_error = None
		try:
			page = await self._source.fetch_page(self.page_size, 0)
		except IncompleteProfile:
			if token == self._token:
				self._fail(MatchesError.NO_LOCATION)
			return
		except MatchesRequestError as exc:
			if token == self._token:
				logger.warning("matches_initial_fetch_failed", extra={"status": exc.status_code, "code": exc.code})
				self._fail(MatchesError.GENERIC)
			return
		except Exception:
			if token == self._token:
				logger.exception("matches_initial_fetch_failed")
				self._fail(MatchesError.GENERIC)
			return
		finally:
			if token == self._token:
				self.is_loading_initial = False

		if token != self._token:
			logger.debug("matches_stale_response_dropped", extra={"attempt": token})
			return
		self.items = list(page.data)
		self.pagination = page.pagination

	def _fail(self, error: MatchesError) -> None:
		self.error = error
		self.items = []
		self.pagination = None

	async def load_more(self) -> None:
		"""Append the next page; does nothing when there is none to fetch.

		A failure keeps the accumulated items and records ``load_more_error``.
		"""
		if self.pagination is None or self.is_loading_more or self.is_loading_initial:
			return
		next_offset = self.pagination.next_offset
		if next_offset >= self.pagination.total:
			return

		token = self._token
		self.is_loading_more = True
		self.load_more_error = None
		try:
			page = await self._source.fetch_page(self.pagination.limit, next_offset)
		except (IncompleteProfile, MatchesRequestError) as exc:
			if token == self._token:
				self.load_more_error = str(exc)
				logger.warning("matches_load_more_failed", extra={"offset": next_offset})
			return
		except Exception as exc:
			if token == self._token:
				self.load_more_error = str(exc) or type(exc).__name__
				logger.exception("matches_load_more_failed", extra={"offset": next_offset})
			return
		finally:
			if token == self._token:
				self.is_loading_more = False

		if token != self._token:
			return
		self.items.extend(page.data)
		self.pagination = page.pagination
