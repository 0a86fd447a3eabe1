"""Per-user sports: which sports a user plays, with what parameters and range."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List

import asyncpg

from app.domain.sports.exceptions import DuplicateSport, SportNotFound, UserSportNotFound
from app.domain.sports.schemas import AddUserSportCommand, UpdateUserSportCommand, UserSportOut
from app.infra.postgres import get_pool
from app.obs import metrics as obs_metrics

logger = logging.getLogger(__name__)

_USER_SPORT_COLUMNS = "us.sport_id, us.parameters, us.custom_range_km, s.name"


def _to_user_sport(row: Mapping[str, Any]) -> UserSportOut:
	parameters = row.get("parameters")
	return UserSportOut(
		sport_id=row["sport_id"],
		name=row["name"],
		parameters=dict(parameters) if isinstance(parameters, Mapping) else {},
		custom_range_km=row.get("custom_range_km"),
	)


def _require_user(user_id: str) -> None:
	if not user_id:
		raise ValueError("User ID is required")


def _affected_rows(status: str) -> int:
	# asyncpg returns the command tag, e.g. "DELETE 1".
	try:
		return int(str(status).rsplit(" ", 1)[-1])
	except ValueError:
		return 0


async def list_user_sports(user_id: str) -> List[UserSportOut]:
	_require_user(user_id)
	pool = await get_pool()
	async with pool.acquire() as conn:
		rows = await conn.fetch(
			f"""
			SELECT {_USER_SPORT_COLUMNS}
			FROM user_sports us
			JOIN sports s ON s.id = us.sport_id
			WHERE us.user_id = $1::uuid
			ORDER BY us.sport_id ASC
			""",
			user_id,
		)
	return [_to_user_sport(row) for row in rows]


async def add_user_sport(user_id: str, command: AddUserSportCommand) -> UserSportOut:
	"""Attach a sport to the user's profile.

	Raises SportNotFound for an unknown sport and DuplicateSport when the user
	already has it.
	"""
	_require_user(user_id)
	pool = await get_pool()
	async with pool.acquire() as conn:
		async with conn.transaction():
			sport = await conn.fetchrow("SELECT id, name FROM sports WHERE id = $1", command.sport_id)
			if sport is None:
				raise SportNotFound(command.sport_id)
			existing = await conn.fetchrow(
				"SELECT 1 FROM user_sports WHERE user_id = $1::uuid AND sport_id = $2",
				user_id,
				command.sport_id,
			)
			if existing is not None:
				raise DuplicateSport(command.sport_id)
			try:
				row = await conn.fetchrow(
					"""
					INSERT INTO user_sports (user_id, sport_id, parameters, custom_range_km)
					VALUES ($1::uuid, $2, $3, $4)
					RETURNING sport_id, parameters, custom_range_km
					""",
					user_id,
					command.sport_id,
					command.parameters,
					command.custom_range_km,
				)
			except asyncpg.UniqueViolationError:
				# Lost a race with a concurrent add of the same sport.
				raise DuplicateSport(command.sport_id) from None
	obs_metrics.inc_user_sport_change("add")
	logger.info("user_sport_added", extra={"sport_id": command.sport_id})
	return _to_user_sport({**dict(row), "name": sport["name"]})


async def update_user_sport(user_id: str, sport_id: int, command: UpdateUserSportCommand) -> UserSportOut:
	"""Update parameters and/or custom range; raises UserSportNotFound."""
	_require_user(user_id)
	fields = command.model_dump(exclude_unset=True)
	assignments: list[str] = []
	params: list[Any] = []
	if fields.get("parameters"):
		params.append(fields["parameters"])
		assignments.append(f"parameters = ${len(params) + 2}")
	if "custom_range_km" in fields:
		params.append(fields["custom_range_km"])
		assignments.append(f"custom_range_km = ${len(params) + 2}")

	pool = await get_pool()
	async with pool.acquire() as conn:
		if assignments:
			row = await conn.fetchrow(
				f"""
				WITH updated AS (
					UPDATE user_sports
					SET {", ".join(assignments)}
					WHERE user_id = $1::uuid AND sport_id = $2
					RETURNING sport_id, parameters, custom_range_km
				)
				SELECT u.sport_id, u.parameters, u.custom_range_km, s.name
				FROM updated u
				JOIN sports s ON s.id = u.sport_id
				""",
				user_id,
				sport_id,
				*params,
			)
		else:
			row = await conn.fetchrow(
				f"""
				SELECT {_USER_SPORT_COLUMNS}
				FROM user_sports us
				JOIN sports s ON s.id = us.sport_id
				WHERE us.user_id = $1::uuid AND us.sport_id = $2
				""",
				user_id,
				sport_id,
			)
	if row is None:
		raise UserSportNotFound(sport_id)
	obs_metrics.inc_user_sport_change("update")
	return _to_user_sport(row)


async def delete_user_sport(user_id: str, sport_id: int) -> None:
	_require_user(user_id)
	if sport_id < 1:
		raise ValueError("Valid sport ID is required")
	pool = await get_pool()
	async with pool.acquire() as conn:
		status = await conn.execute(
			"DELETE FROM user_sports WHERE user_id = $1::uuid AND sport_id = $2",
			user_id,
			sport_id,
		)
	if _affected_rows(status) == 0:
		raise UserSportNotFound(sport_id)
	obs_metrics.inc_user_sport_change("delete")
	logger.info("user_sport_deleted", extra={"sport_id": sport_id})
