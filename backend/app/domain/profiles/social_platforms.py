"""Known social platforms for profile links (display names and base URLs)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class PlatformConfig:
	key: str
	name: str
	base_url: str


PLATFORM_CONFIG: dict[str, PlatformConfig] = {
	"instagram": PlatformConfig("instagram", "Instagram", "https://www.instagram.com"),
	"facebook": PlatformConfig("facebook", "Facebook", "https://www.facebook.com"),
	"strava": PlatformConfig("strava", "Strava", "https://www.strava.com"),
	"garmin": PlatformConfig("garmin", "Garmin", "https://connect.garmin.com"),
}


def get_platform_config(platform: str) -> Optional[PlatformConfig]:
	return PLATFORM_CONFIG.get(platform.strip().lower())


def platform_label(platform: str) -> str:
	"""Display name for a social link key; unknown keys are shown as-is."""
	config = get_platform_config(platform)
	return config.name if config else platform
