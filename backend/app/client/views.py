"""Display-ready match cards built from pager state.

Entry point for the view layer: show ``empty_state(pager)`` when it returns a
panel, otherwise ``match_cards(pager)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from app.client.pager import MatchesError, MatchesPager
from app.domain.matching.schemas import MatchedUser
from app.domain.profiles.social_platforms import platform_label
from app.domain.sports.parameters import format_parameters


@dataclass(slots=True)
class SportLine:
	name: str
	parameters: list[tuple[str, str]] = field(default_factory=list)


@dataclass(slots=True)
class MatchCard:
	user_id: str
	title: str
	distance: str
	email: Optional[str]
	social_links: list[tuple[str, str]] = field(default_factory=list)
	sports: list[SportLine] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class EmptyState:
	variant: str
	title: str
	description: str


NO_LOCATION_STATE = EmptyState(
	"no-location",
	"Set your location",
	"Add your location and default range to your profile to see people nearby.",
)
ERROR_STATE = EmptyState("error", "Something went wrong", "We could not load your matches. Try again later.")
NO_MATCHES_STATE = EmptyState("no-matches", "No matches yet", "Nobody nearby shares your sports right now.")


def format_distance(distance_km: float) -> str:
	return f"{distance_km:.1f} km"


def build_match_card(user: MatchedUser) -> MatchCard:
	return MatchCard(
		user_id=user.id,
		title=user.display_name,
		distance=format_distance(user.distance_km),
		email=user.email,
		social_links=[(platform_label(platform), url) for platform, url in user.social_links.items()],
		sports=[SportLine(sport.name, format_parameters(sport.name, sport.parameters)) for sport in user.sports],
	)


def empty_state(pager: MatchesPager) -> Optional[EmptyState]:
	"""Return the empty/error panel to show instead of cards, if any."""
	if pager.is_loading_initial:
		return None
	if pager.error is MatchesError.NO_LOCATION:
		return NO_LOCATION_STATE
	if pager.error is MatchesError.GENERIC:
		return ERROR_STATE
	if pager.pagination is not None and not pager.items:
		return NO_MATCHES_STATE
	return None


def match_cards(pager: MatchesPager) -> list[MatchCard]:
	return [build_match_card(user) for user in pager.items]
