"""Domain-level exceptions for the matching contract."""

from __future__ import annotations

from typing import Any


class MatchingError(Exception):
	"""Base class for matching errors."""

	reason: str = "matching_error"

	def __init__(self, message: str | None = None) -> None:
		super().__init__(message or self.reason)
		self.message = message or self.reason


class ValidationError(MatchingError):
	"""Raised when a pagination field is parsed but out of range."""

	reason = "validation_error"

	def __init__(self, field: str, constraint: str, message: str) -> None:
		super().__init__(message)
		self.field = field
		self.constraint = constraint

	def to_details(self) -> list[dict[str, Any]]:
		return [{"path": [self.field], "constraint": self.constraint, "message": self.message}]


class InvalidArgument(MatchingError):
	reason = "invalid_argument"


class IncompleteProfile(MatchingError):
	"""The caller's own profile lacks location or default range."""

	reason = "profile_incomplete"


class MalformedUpstreamResponse(MatchingError):
	"""The matching function returned a shape we cannot trust."""

	reason = "malformed_upstream_response"
