"""Pydantic schemas for the matches endpoint and client pager."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field

ParameterValue = Union[bool, int, float, str, list[Any]]

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_OFFSET = 0
# Window arguments are int4 in the matching function.
MAX_OFFSET = 2_147_483_647


class PaginationWindow(BaseModel):
	"""Slice of the ordered candidate list requested by the caller."""

	limit: int = Field(default=DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT)
	offset: int = Field(default=DEFAULT_OFFSET, ge=0, le=MAX_OFFSET)


class PaginationMeta(BaseModel):
	total: int = Field(..., ge=0)
	limit: int
	offset: int

	@property
	def next_offset(self) -> int:
		return self.offset + self.limit

	@property
	def has_next_page(self) -> bool:
		return self.next_offset < self.total


class MatchedSport(BaseModel):
	sport_id: int
	name: str
	parameters: dict[str, ParameterValue] = Field(default_factory=dict)
	custom_range_km: Optional[int] = None


class MatchedUser(BaseModel):
	"""One candidate returned by the matching function."""

	id: str
	username: Optional[str] = None
	display_name: str
	email: Optional[str] = None
	social_links: dict[str, str] = Field(default_factory=dict)
	distance_km: float = Field(..., ge=0)
	sports: list[MatchedSport] = Field(default_factory=list)


class MatchesPage(BaseModel):
	data: list[MatchedUser] = Field(default_factory=list)
	pagination: PaginationMeta
