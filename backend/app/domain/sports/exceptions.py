"""Domain-level exceptions for sports and user sports."""

from __future__ import annotations


class SportsError(Exception):
	"""Base class for sport errors."""

	reason: str = "sports_error"

	def __init__(self, sport_id: int, message: str) -> None:
		super().__init__(message)
		self.sport_id = sport_id
		self.message = message


class SportNotFound(SportsError):
	reason = "SPORT_NOT_FOUND"

	def __init__(self, sport_id: int) -> None:
		super().__init__(sport_id, f"Sport with id {sport_id} not found")


class DuplicateSport(SportsError):
	reason = "DUPLICATE_SPORT"

	def __init__(self, sport_id: int) -> None:
		super().__init__(sport_id, f"User already has sport with id {sport_id}")


class UserSportNotFound(SportsError):
	reason = "SPORT_NOT_FOUND"

	def __init__(self, sport_id: int) -> None:
		super().__init__(sport_id, f"Sport with id {sport_id} not found in user's profile")
