"""Services package: the game state engine.

`zone` holds the pure geometry (zone radius, haversine distance);
`game_state` holds catch detection, nearest-opponent search and the
per-viewer projection built on top of a store snapshot.
"""

from .zone import zone_radius, room_zone_radius, distance_meters
from .game_state import (
	detect_catches,
	nearest_opponents,
	project_player,
	project_players,
	compute_room_state,
)

__all__ = [
	"zone_radius",
	"room_zone_radius",
	"distance_meters",
	"detect_catches",
	"nearest_opponents",
	"project_player",
	"project_players",
	"compute_room_state",
]
