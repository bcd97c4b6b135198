"""Domain-level typed models used by the engine and stores.

Prefer `TypedDict` for lightweight structural typing that maps directly to
the JSON-like dicts read from the database. Keys are camelCase because these
dicts flow unchanged into HTTP responses.
"""
from __future__ import annotations

from typing import TypedDict, Literal


Role = Literal["hunter", "runner"]
Status = Literal["ready", "caught"]

ROLE_HUNTER: Role = "hunter"
ROLE_RUNNER: Role = "runner"
STATUS_READY: Status = "ready"
STATUS_CAUGHT: Status = "caught"

# Room configuration limits and defaults (meters / seconds).
MIN_ZONE_RADIUS = 20
START_RADIUS_RANGE = (20, 100_000)
SHRINK_STEP_SEC_RANGE = (1, 86_400)
SHRINK_AMOUNT_RANGE = (1, 100_000)
DEFAULT_START_RADIUS = 800
DEFAULT_SHRINK_STEP_SEC = 20
DEFAULT_SHRINK_AMOUNT = 50

MAX_NAME_LENGTH = 40
DEFAULT_PLAYER_NAME = "Player"


class Room(TypedDict):
	code: str
	startRadius: int
	shrinkStepSec: int
	shrinkAmount: int
	startedAt: int | None
	createdAt: int


class Player(TypedDict):
	id: str
	room: str
	name: str
	role: Role
	status: Status
	lastSeen: int | None


class PlayerWithLocation(TypedDict):
	id: str
	name: str
	role: Role
	status: Status
	lastSeen: int | None
	lat: float | None
	lng: float | None
	locTs: int | None


class NearestOpponent(TypedDict):
	id: str | None
	dist: float


__all__ = [
	"Role",
	"Status",
	"ROLE_HUNTER",
	"ROLE_RUNNER",
	"STATUS_READY",
	"STATUS_CAUGHT",
	"MIN_ZONE_RADIUS",
	"START_RADIUS_RANGE",
	"SHRINK_STEP_SEC_RANGE",
	"SHRINK_AMOUNT_RANGE",
	"DEFAULT_START_RADIUS",
	"DEFAULT_SHRINK_STEP_SEC",
	"DEFAULT_SHRINK_AMOUNT",
	"MAX_NAME_LENGTH",
	"DEFAULT_PLAYER_NAME",
	"Room",
	"Player",
	"PlayerWithLocation",
	"NearestOpponent",
]
