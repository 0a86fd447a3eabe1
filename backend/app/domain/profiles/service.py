"""Profile reads and updates for the current user."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from app.domain.profiles.exceptions import ProfileNotFound
from app.domain.profiles.schemas import GeoJsonPoint, ProfileOut, ProfileUpdate
from app.infra.postgres import get_pool
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

_PROFILE_COLUMNS = """
	id,
	username,
	display_name,
	ST_AsGeoJSON(location)::json AS location,
	default_range_km,
	social_links,
	created_at,
	updated_at
"""


def _location(value: Any) -> Optional[GeoJsonPoint]:
	if not isinstance(value, Mapping):
		return None
	coordinates = value.get("coordinates")
	if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
		return None
	return GeoJsonPoint(coordinates=(float(coordinates[0]), float(coordinates[1])))


def _to_profile(row: Mapping[str, Any]) -> ProfileOut:
	links = row.get("social_links")
	return ProfileOut(
		id=str(row["id"]),
		username=row.get("username"),
		display_name=row.get("display_name"),
		location=_location(row.get("location")),
		default_range_km=row.get("default_range_km"),
		social_links={str(k): v for k, v in links.items() if isinstance(v, str)} if isinstance(links, Mapping) else {},
		created_at=row.get("created_at"),
		updated_at=row.get("updated_at"),
	)


async def get_profile(user_id: str) -> Optional[ProfileOut]:
	if not user_id:
		raise ValueError("User ID is required")
	pool = await get_pool()
	async with pool.acquire() as conn:
		row = await conn.fetchrow(
			f"SELECT {_PROFILE_COLUMNS} FROM profiles WHERE id = $1::uuid",
			user_id,
		)
	if row is None:
		logger.warning("profile_not_found", extra={"target_user": user_id})
		return None
	return _to_profile(dict(row))


def _build_update(command: ProfileUpdate) -> tuple[list[str], list[Any]]:
	fields = command.model_dump(exclude_unset=True)
	assignments: list[str] = []
	params: list[Any] = []
	for column in ("display_name", "default_range_km", "social_links"):
		if column in fields and fields[column] is not None:
			params.append(fields[column])
			assignments.append(f"{column} = ${len(params) + 1}")
	if command.location is not None and "location" in fields:
		params.extend([command.location.longitude, command.location.latitude])
		lon_idx, lat_idx = len(params), len(params) + 1
		assignments.append(f"location = ST_SetSRID(ST_MakePoint(${lon_idx}, ${lat_idx}), 4326)::geography")
	assignments.append("updated_at = NOW()")
	return assignments, params


async def update_profile(user_id: str, command: ProfileUpdate) -> ProfileOut:
	"""Apply the provided fields and return the refreshed profile.

	Raises ProfileNotFound when no row matches the user.
	"""
	if not user_id:
		raise ValueError("User ID is required")
	assignments, params = _build_update(command)
	logger.info("profile_update", extra={"fields": sorted(command.model_dump(exclude_unset=True))})
	pool = await get_pool()
	async with pool.acquire() as conn:
		row = await conn.fetchrow(
			f"""
			UPDATE profiles
			SET {", ".join(assignments)}
			WHERE id = $1::uuid
			RETURNING {_PROFILE_COLUMNS}
			""",
			user_id,
			*params,
		)
	if row is None:
		raise ProfileNotFound()
	obs_metrics.inc_profile_update()
	return _to_profile(dict(row))
