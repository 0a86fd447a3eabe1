"""Per-sport parameter definitions and display conversions.

Only presentation code reads this table; stored parameters are opaque to the
matching contract. Pace values are stored as seconds, durations as minutes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

ParameterType = Literal["number", "pace", "time", "enum"]

_PACE_RE = re.compile(r"(\d{1,2}):(\d{2})")
_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})h?")


@dataclass(frozen=True, slots=True)
class ParameterConfig:
	name: str
	label: str
	type: ParameterType
	unit: str = ""
	placeholder: str = ""
	options: tuple[str, ...] = ()
	min: Optional[float] = None
	max: Optional[float] = None


def _distance(unit: str, placeholder: str, low: float, high: float) -> ParameterConfig:
	return ParameterConfig("dystans", "Dystans", "number", unit, placeholder, min=low, max=high)


def _pace(unit: str, placeholder: str) -> ParameterConfig:
	return ParameterConfig("tempo", "Tempo", "pace", unit, placeholder)


SPORT_PARAMETERS: dict[str, tuple[ParameterConfig, ...]] = {
	"bieganie": (
		_distance("km", "10", 1, 200),
		_pace("min/km", "5:30"),
	),
	"rower szosowy": (
		_distance("km", "50", 1, 200),
		ParameterConfig("prędkość", "Prędkość", "number", "km/h", "30", min=10, max=60),
	),
	"rower mtb": (
		_distance("km", "25", 1, 200),
		ParameterConfig("czas", "Czas", "time", "", "1:30h"),
		ParameterConfig("przewyższenie", "Przewyższenie", "number", "m", "800", min=0, max=5000),
	),
	"pływanie w basenie": (
		_distance("m", "1500", 100, 10000),
		_pace("min/100m", "2:00"),
	),
	"pływanie na wodach otwartych": (
		_distance("m", "2000", 100, 20000),
		_pace("min/100m", "2:00"),
	),
	"rolki": (
		_distance("km", "15", 1, 100),
		ParameterConfig(
			"styl",
			"Styl",
			"enum",
			placeholder="Wybierz styl",
			options=("rekreacyjny", "szybki", "freestyle"),
		),
	),
	"nurkowanie": (
		ParameterConfig("głębokość", "Głębokość", "number", "m", "30", min=5, max=100),
	),
	"tenis": (
		ParameterConfig(
			"poziom",
			"Poziom NTRP",
			"enum",
			placeholder="Wybierz poziom",
			options=("1.0", "1.5", "2.0", "2.5", "3.0", "3.5", "4.0", "4.5", "5.0", "5.5", "6.0+"),
		),
	),
}


def get_sport_parameters(sport_name: str) -> tuple[ParameterConfig, ...]:
	return SPORT_PARAMETERS.get(sport_name, ())


def pace_to_seconds(pace: str) -> Optional[int]:
	"""``"5:30"`` -> 330. Returns None when the text is not ``m:ss``."""
	match = _PACE_RE.fullmatch(pace)
	if match is None:
		return None
	return int(match.group(1)) * 60 + int(match.group(2))


def seconds_to_pace(seconds: int) -> str:
	minutes, secs = divmod(int(seconds), 60)
	return f"{minutes}:{secs:02d}"


def time_to_minutes(value: str) -> Optional[int]:
	"""``"1:30h"`` -> 90. Minutes must be below 60."""
	match = _TIME_RE.fullmatch(value)
	if match is None:
		return None
	hours, minutes = int(match.group(1)), int(match.group(2))
	if minutes >= 60:
		return None
	return hours * 60 + minutes


def minutes_to_time(total_minutes: int) -> str:
	hours, minutes = divmod(int(total_minutes), 60)
	return f"{hours}:{minutes:02d}h"


def _is_number(value: Any) -> bool:
	return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_value(config: ParameterConfig, value: Any) -> str:
	if isinstance(value, list):
		return ", ".join(str(item) for item in value)
	if config.type == "pace" and _is_number(value):
		text = seconds_to_pace(int(value))
	elif config.type == "time" and _is_number(value):
		text = minutes_to_time(int(value))
	elif _is_number(value) and float(value).is_integer():
		text = str(int(value))
	else:
		text = str(value)
	return f"{text} {config.unit}" if config.unit else text


def format_parameters(sport_name: str, parameters: Mapping[str, Any]) -> list[tuple[str, str]]:
	"""Render a sport's parameters as ``(label, text)`` pairs.

	Known parameters come first in table order; anything else follows under its
	raw key.
	"""
	rendered: list[tuple[str, str]] = []
	seen: set[str] = set()
	for config in get_sport_parameters(sport_name):
		if config.name in parameters:
			rendered.append((config.label, format_value(config, parameters[config.name])))
			seen.add(config.name)
	for key, value in parameters.items():
		if key not in seen:
			rendered.append((key, format_value(ParameterConfig(key, key, "number"), value)))
	return rendered
