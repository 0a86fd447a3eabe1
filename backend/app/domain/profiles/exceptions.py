"""Domain-level exceptions for profiles."""

from __future__ import annotations


class ProfileError(Exception):
	"""Base class for profile errors."""

	reason: str = "profile_error"

	def __init__(self, reason: str | None = None) -> None:
		super().__init__(reason or self.reason)
		if reason:
			self.reason = reason


class ProfileNotFound(ProfileError):
	reason = "PROFILE_NOT_FOUND"
