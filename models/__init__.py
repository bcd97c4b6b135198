"""Data models used by the application.

Split into:
- `domain_models`: TypedDicts and constants used by the engine and stores
- `api_models`: Pydantic models used for request validation

Import submodules to make them available as `models.api_models`.
"""

from . import domain_models, api_models

# Re-export domain models (TypedDicts) and role/status constants
from .domain_models import (
	Room,
	Player,
	PlayerWithLocation,
	NearestOpponent,
	Role,
	Status,
	ROLE_HUNTER,
	ROLE_RUNNER,
	STATUS_READY,
	STATUS_CAUGHT,
)

# Re-export API models (Pydantic models used for requests)
from .api_models import (
	CreateRoomRequest,
	JoinRequest,
	LeaveRequest,
	LocationRequest,
)

__all__ = [
	# submodules
	"domain_models",
	"api_models",
	# domain models
	"Room",
	"Player",
	"PlayerWithLocation",
	"NearestOpponent",
	"Role",
	"Status",
	"ROLE_HUNTER",
	"ROLE_RUNNER",
	"STATUS_READY",
	"STATUS_CAUGHT",
	# api models
	"CreateRoomRequest",
	"JoinRequest",
	"LeaveRequest",
	"LocationRequest",
]
