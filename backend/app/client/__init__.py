"""HTTP client, accumulated-page state and match cards for the matches endpoint."""

from app.client.api import MatchesApiClient, MatchesRequestError
from app.client.pager import MatchesError, MatchesPager, PagerState
from app.client.views import EmptyState, MatchCard, build_match_card, empty_state, match_cards

__all__ = [
	"EmptyState",
	"MatchCard",
	"MatchesApiClient",
	"MatchesError",
	"MatchesPager",
	"MatchesRequestError",
	"PagerState",
	"build_match_card",
	"empty_state",
	"match_cards",
]
