"""Map raw matching-function records to stable DTOs.

Pure functions only: the mapper never touches the network or storage, so it is
shared by the server gateway and the client pager.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domain.matching.exceptions import MalformedUpstreamResponse
from app.domain.matching.schemas import MatchedSport, MatchedUser

# Single source for the "no name" placeholder shown in match cards.
UNNAMED_USER_LABEL = "Unnamed User"

_PRIMITIVES = (bool, int, float, str)


def _as_mapping(value: Any) -> dict[str, Any]:
	"""Return a plain dict for non-list mappings, otherwise an empty one."""
	if isinstance(value, Mapping):
		return {str(key): item for key, item in value.items()}
	return {}


def _clean_social_links(value: Any) -> dict[str, str]:
	return {key: link for key, link in _as_mapping(value).items() if isinstance(link, str)}


def _clean_parameters(value: Any) -> dict[str, Any]:
	cleaned: dict[str, Any] = {}
	for key, item in _as_mapping(value).items():
		if isinstance(item, _PRIMITIVES):
			cleaned[key] = item
		elif isinstance(item, (list, tuple)) and all(isinstance(part, _PRIMITIVES) for part in item):
			cleaned[key] = list(item)
	return cleaned


def _optional_str(value: Any) -> str | None:
	if value is None:
		return None
	text = str(value)
	return text if text.strip() else None


def resolve_display_name(display_name: Any, username: Any) -> str:
	return _optional_str(display_name) or _optional_str(username) or UNNAMED_USER_LABEL


def _distance(value: Any) -> float:
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise MalformedUpstreamResponse("distance_km must be a number")
	distance = float(value)
	if distance < 0 or distance != distance:
		raise MalformedUpstreamResponse("distance_km must be non-negative")
	return distance


def map_matched_sport(raw: Any) -> MatchedSport:
	if not isinstance(raw, Mapping):
		raise MalformedUpstreamResponse("sport entry must be an object")
	try:
		sport_id = int(raw["sport_id"])
	except (KeyError, TypeError, ValueError):
		raise MalformedUpstreamResponse("sport entry is missing sport_id") from None
	custom_range = raw.get("custom_range_km")
	return MatchedSport(
		sport_id=sport_id,
		name=str(raw.get("name") or ""),
		parameters=_clean_parameters(raw.get("parameters")),
		custom_range_km=int(custom_range) if isinstance(custom_range, (int, float)) and not isinstance(custom_range, bool) else None,
	)


def map_matched_user(raw: Any) -> MatchedUser:
	"""Normalise one matched record.

	- ``social_links`` and sport ``parameters`` that are not objects become ``{}``
	- ``display_name`` falls back to ``username`` and then to UNNAMED_USER_LABEL
	- a non-list ``sports`` value becomes ``[]``
	"""
	if not isinstance(raw, Mapping):
		raise MalformedUpstreamResponse("matched user must be an object")
	user_id = _optional_str(raw.get("id"))
	if user_id is None:
		raise MalformedUpstreamResponse("matched user is missing id")
	username = _optional_str(raw.get("username"))
	raw_sports = raw.get("sports")
	sports = [map_matched_sport(item) for item in raw_sports] if isinstance(raw_sports, list) else []
	return MatchedUser(
		id=user_id,
		username=username,
		display_name=resolve_display_name(raw.get("display_name"), username),
		email=_optional_str(raw.get("email")),
		social_links=_clean_social_links(raw.get("social_links")),
		distance_km=_distance(raw.get("distance_km")),
		sports=sports,
	)
