"""Limit/offset parsing for list endpoints.

Query-string input is untrusted. Parsing is tolerant (``"10.5"`` reads as 10,
``"abc"`` falls back to the default) but a value that parses and is out of range
is rejected rather than clamped.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional, Union

from starlette.datastructures import QueryParams

from app.domain.matching.exceptions import ValidationError
from app.domain.matching.schemas import DEFAULT_LIMIT, DEFAULT_OFFSET, MAX_LIMIT, MAX_OFFSET, MIN_LIMIT, PaginationWindow

_INT_PREFIX = re.compile(r"[+-]?[0-9]+")


def parse_int_prefix(value: Optional[str]) -> Optional[int]:
	"""Parse the leading base-10 integer of ``value``.

	Surrounding whitespace is ignored and anything after the digits is dropped.
	Returns None when there is no numeric prefix.
	"""
	if value is None:
		return None
	match = _INT_PREFIX.match(value.strip())
	if match is None:
		return None
	return int(match.group(0))


def first_query_value(params: Union[QueryParams, Mapping[str, str]], key: str) -> Optional[str]:
	"""Return the first occurrence of ``key``; later duplicates are ignored."""
	if isinstance(params, QueryParams):
		values = params.getlist(key)
		return values[0] if values else None
	return params.get(key)


def _resolve(value: Optional[str], default: int) -> int:
	if not value:
		return default
	parsed = parse_int_prefix(value)
	return default if parsed is None else parsed


def validate_matches_query(limit: Optional[Union[str, int]] = None, offset: Optional[Union[str, int]] = None) -> PaginationWindow:
	"""Normalise ``limit``/``offset`` into a PaginationWindow.

	Raises ValidationError naming the field and violated constraint when a
	parsed value is out of range.
	"""
	resolved_limit = limit if isinstance(limit, int) else _resolve(limit, DEFAULT_LIMIT)
	resolved_offset = offset if isinstance(offset, int) else _resolve(offset, DEFAULT_OFFSET)

	if resolved_limit < MIN_LIMIT:
		raise ValidationError("limit", "min", "Limit must be a positive number")
	if resolved_limit > MAX_LIMIT:
		raise ValidationError("limit", "max", f"Maximum limit is {MAX_LIMIT} items per page")
	if resolved_offset < 0:
		raise ValidationError("offset", "min", "Offset cannot be negative")
	if resolved_offset > MAX_OFFSET:
		raise ValidationError("offset", "max", f"Offset cannot exceed {MAX_OFFSET}")
	return PaginationWindow(limit=resolved_limit, offset=resolved_offset)


def matches_window_from_query(params: Union[QueryParams, Mapping[str, str]]) -> PaginationWindow:
	return validate_matches_query(
		first_query_value(params, "limit"),
		first_query_value(params, "offset"),
	)
