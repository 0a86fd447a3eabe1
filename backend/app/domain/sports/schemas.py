"""Pydantic schemas for the sports taxonomy and per-user sports."""

from __future__ import annotations

from typing import Annotated, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, model_validator

CustomRange = Optional[Annotated[int, Field(ge=1, le=100)]]

# bool first so JSON true/false never coerces to a number.
SportParameterValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr, list[StrictStr], list[Union[StrictInt, StrictFloat]]]


def _require_parameters(value: dict[str, SportParameterValue]) -> dict[str, SportParameterValue]:
	if not value:
		raise ValueError("Parameters cannot be an empty object")
	return value


SportParameters = Annotated[dict[str, SportParameterValue], AfterValidator(_require_parameters)]


class SportOut(BaseModel):
	id: int
	name: str


class UserSportOut(BaseModel):
	sport_id: int
	name: str
	parameters: dict[str, object] = Field(default_factory=dict)
	custom_range_km: Optional[int] = None


class AddUserSportCommand(BaseModel):
	model_config = ConfigDict(extra="forbid")

	sport_id: Annotated[StrictInt, Field(gt=0)]
	parameters: SportParameters
	custom_range_km: CustomRange = None


class UpdateUserSportCommand(BaseModel):
	"""Partial update; at least one field has to be present."""

	model_config = ConfigDict(extra="forbid")

	parameters: Optional[SportParameters] = None
	custom_range_km: CustomRange = None

	@model_validator(mode="after")
	def _not_empty(self) -> "UpdateUserSportCommand":
		if not self.model_fields_set:
			raise ValueError("Request body cannot be empty")
		return self
