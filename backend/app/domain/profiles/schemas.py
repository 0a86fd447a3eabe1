"""Pydantic schemas for profile endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

Longitude = Annotated[float, Field(ge=-180.0, le=180.0)]
Latitude = Annotated[float, Field(ge=-90.0, le=90.0)]


class GeoJsonPoint(BaseModel):
	"""GeoJSON point; coordinates are ``[longitude, latitude]``."""

	type: Literal["Point"] = "Point"
	coordinates: tuple[Longitude, Latitude]

	@property
	def longitude(self) -> float:
		return self.coordinates[0]

	@property
	def latitude(self) -> float:
		return self.coordinates[1]


class ProfileOut(BaseModel):
	id: str
	username: Optional[str] = None
	display_name: Optional[str] = None
	location: Optional[GeoJsonPoint] = None
	default_range_km: Optional[int] = None
	social_links: dict[str, str] = Field(default_factory=dict)
	created_at: Optional[datetime] = None
	updated_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
	"""PATCH body; every field optional, unknown fields rejected."""

	model_config = ConfigDict(extra="forbid")

	display_name: Optional[Annotated[str, Field(min_length=3, max_length=50)]] = None
	location: Optional[GeoJsonPoint] = None
	default_range_km: Optional[Annotated[int, Field(ge=1, le=100)]] = None
	social_links: Optional[dict[str, str]] = None

	@field_validator("social_links")
	def _validate_links(cls, value: Optional[dict[str, str]]) -> Optional[dict[str, str]]:
		if value is None:
			return value
		for platform, link in value.items():
			parsed = urlparse(link)
			if parsed.scheme not in ("http", "https") or not parsed.netloc:
				raise ValueError(f"Invalid URL format for social link: {platform}")
		return value
