"""Pydantic request models for the FastAPI endpoints.

Keep transport concerns (validation, coercion, aliases) here and keep
domain types in `models.domain_models`. Field names on the wire are
camelCase; Python attributes are snake_case.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .domain_models import (
	Role,
	START_RADIUS_RANGE,
	SHRINK_STEP_SEC_RANGE,
	SHRINK_AMOUNT_RANGE,
	DEFAULT_START_RADIUS,
	DEFAULT_SHRINK_STEP_SEC,
	DEFAULT_SHRINK_AMOUNT,
	DEFAULT_PLAYER_NAME,
	MAX_NAME_LENGTH,
	ROLE_HUNTER,
	ROLE_RUNNER,
)
from utils.validation import clamp, parse_int, normalize_room_code, strip_control_chars


class ApiModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateRoomRequest(ApiModel):
	# Loose client input is coerced to a default and then clamped, never rejected
	start_radius: int = DEFAULT_START_RADIUS
	shrink_step_sec: int = DEFAULT_SHRINK_STEP_SEC
	shrink_amount: int = DEFAULT_SHRINK_AMOUNT

	@field_validator("start_radius", mode="before")
	@classmethod
	def _start_radius(cls, v: Any) -> int:
		return clamp(parse_int(v, DEFAULT_START_RADIUS), *START_RADIUS_RANGE)

	@field_validator("shrink_step_sec", mode="before")
	@classmethod
	def _shrink_step_sec(cls, v: Any) -> int:
		return clamp(parse_int(v, DEFAULT_SHRINK_STEP_SEC), *SHRINK_STEP_SEC_RANGE)

	@field_validator("shrink_amount", mode="before")
	@classmethod
	def _shrink_amount(cls, v: Any) -> int:
		return clamp(parse_int(v, DEFAULT_SHRINK_AMOUNT), *SHRINK_AMOUNT_RANGE)


class JoinRequest(ApiModel):
	room: str | None = None
	name: str = DEFAULT_PLAYER_NAME
	role: Role = ROLE_HUNTER

	@field_validator("room", mode="before")
	@classmethod
	def _room(cls, v: Any) -> str | None:
		if not isinstance(v, str):
			return None
		return normalize_room_code(v) or None

	@field_validator("name", mode="before")
	@classmethod
	def _name(cls, v: Any) -> str:
		if not isinstance(v, str):
			return DEFAULT_PLAYER_NAME
		name = strip_control_chars(v).strip()
		return name[:MAX_NAME_LENGTH] if name else DEFAULT_PLAYER_NAME

	@field_validator("role", mode="before")
	@classmethod
	def _role(cls, v: Any) -> str:
		# anything but an explicit runner joins as a hunter
		return ROLE_RUNNER if v == ROLE_RUNNER else ROLE_HUNTER


class LeaveRequest(ApiModel):
	player_id: str | None = None


class LocationRequest(ApiModel):
	player_id: str | None = None
	lat: float | None = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
	lng: float | None = Field(default=None, ge=-180, le=180, allow_inf_nan=False)


__all__ = [
	"ApiModel",
	"CreateRoomRequest",
	"JoinRequest",
	"LeaveRequest",
	"LocationRequest",
]
