"""Matching domain: the paginated contract around ``get_matches_for_user``."""

from app.domain.matching.exceptions import (
	IncompleteProfile,
	InvalidArgument,
	MalformedUpstreamResponse,
	MatchingError,
	ValidationError,
)
from app.domain.matching.gateway import MatchesService, get_matches_service
from app.domain.matching.mapper import UNNAMED_USER_LABEL, map_matched_user
from app.domain.matching.schemas import MatchedSport, MatchedUser, MatchesPage, PaginationMeta, PaginationWindow

__all__ = [
	"IncompleteProfile",
	"InvalidArgument",
	"MalformedUpstreamResponse",
	"MatchedSport",
	"MatchedUser",
	"MatchesPage",
	"MatchesService",
	"MatchingError",
	"PaginationMeta",
	"PaginationWindow",
	"UNNAMED_USER_LABEL",
	"ValidationError",
	"get_matches_service",
	"map_matched_user",
]
