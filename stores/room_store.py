from abc import ABC, abstractmethod

from models.domain_models import Room, Player, PlayerWithLocation, Role, Status


# =========================
# RoomStore Interface
# =========================

class RoomStore(ABC):
    """
    The RoomStore is the sole authority over persisted rooms, players and
    their latest locations.

    Invariants:
    - At most one location per player; the latest write wins
    - Removing a player removes its location
    - A location is never written for a player that does not exist
    - A room's started_at never moves backwards
    """

    # -------------------------------------------------
    # Rooms
    # -------------------------------------------------

    @abstractmethod
    async def create_room(
        self,
        start_radius: int,
        shrink_step_sec: int,
        shrink_amount: int,
        *,
        now: int,
    ) -> str:
        """Create a room with already-clamped settings and return its code.

        Raises:
            RoomCodeExhausted: If no unused code could be generated.
        """

    @abstractmethod
    async def start_room(self, code: str, now: int) -> int:
        """Start the shrink countdown and return the effective started_at.

        Raises:
            RoomNotFound: If the room does not exist.
        """

    @abstractmethod
    async def get_room(self, code: str) -> Room:
        """Return a room by code.

        Raises:
            RoomNotFound: If the room does not exist.
        """

    @abstractmethod
    async def list_rooms(self) -> list[Room]:
        """Return every room (read-only)."""

    # -------------------------------------------------
    # Players
    # -------------------------------------------------

    @abstractmethod
    async def join_player(
        self,
        room: str,
        name: str,
        role: Role,
        *,
        now: int,
    ) -> Player:
        """Add a new player to a room with status `ready`.

        Raises:
            RoomNotFound: If the room does not exist.
        """

    @abstractmethod
    async def leave_player(self, player_id: str) -> bool:
        """Remove a player and its location. Returns False if nothing was removed."""

    @abstractmethod
    async def get_player(self, player_id: str) -> Player:
        """Return a player by id.

        Raises:
            PlayerNotFound: If the player does not exist.
        """

    @abstractmethod
    async def set_player_status(self, player_id: str, status: Status) -> None:
        """Overwrite a player's status. Missing players are ignored."""

    # -------------------------------------------------
    # Locations
    # -------------------------------------------------

    @abstractmethod
    async def upsert_location(
        self,
        player_id: str,
        lat: float,
        lng: float,
        now: int,
    ) -> int:
        """Replace the player's location, bump last_seen and return the timestamp.

        Raises:
            PlayerNotFound: If the player does not exist.
        """

    # -------------------------------------------------
    # Read-side queries (NO state changes)
    # -------------------------------------------------

    @abstractmethod
    async def get_room_snapshot(self, room: str) -> list[PlayerWithLocation]:
        """
        Return every player in the room joined with its latest location,
        in join order. Players without a location have null coordinates.
        """

    # -------------------------------------------------
    # Maintenance
    # -------------------------------------------------

    @abstractmethod
    async def delete_stale_rooms(self, cutoff: int) -> int:
        """
        Delete rooms whose latest activity (creation or any player's
        last_seen) is older than `cutoff`. Returns the number deleted.
        """

    async def close(self) -> None:
        """Release any held resources."""

