# Abstractions
from .room_store import RoomStore

# Exceptions
from .exceptions import (
    StoreError,
    RoomStoreError,
    RoomNotFound,
    PlayerNotFound,
    RoomCodeExhausted,
    UnexpectedResult,
)

# Concrete implementations are private; only abstract interfaces are exported.
from .sqlite_room_store import SqliteRoomStore as _SqliteRoomStore

__all__ = [
    # Abstractions
    "RoomStore",
    # Exceptions
    "StoreError",
    "RoomStoreError",
    "RoomNotFound",
    "PlayerNotFound",
    "RoomCodeExhausted",
    "UnexpectedResult",
    # Lifecycle
    "init_stores",
    "close_stores",
    "get_room_store",
]


# Runtime singleton and initialization helpers
from typing import Optional

room_store: Optional[RoomStore] = None


async def init_stores(db_path: str) -> RoomStore:
    """Initialize the module-level room store for this process.

    Safe to call multiple times; initialization is idempotent. Must be
    awaited inside the event loop that will serve requests (the app lifespan).
    """
    global room_store

    if room_store is None:
        store = _SqliteRoomStore(db_path)
        await store.init()
        room_store = store
    return room_store


async def close_stores() -> None:
    global room_store

    if room_store is not None:
        await room_store.close()
        room_store = None


def get_room_store() -> RoomStore:
    """FastAPI dependency returning the initialized room store."""
    if room_store is None:
        raise RuntimeError("Room store not initialized; call init_stores() first")
    return room_store
