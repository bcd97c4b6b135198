"""
Pytest fixtures for Street Hunt tests.
"""

import itertools
import uuid

import pytest
from fastapi.testclient import TestClient

from stores import RoomStore, RoomNotFound, PlayerNotFound


class FakeRoomStore(RoomStore):
    """In-memory RoomStore used to exercise the engine without SQLite.

    Records every status write in `status_writes` so tests can assert on
    write-through behavior.
    """

    def __init__(self):
        self.rooms = {}
        self.players = {}
        self.locations = {}
        self.status_writes = []
        self._codes = (f"ROOM{n:02d}" for n in itertools.count(1))

    async def create_room(self, start_radius, shrink_step_sec, shrink_amount, *, now):
        code = next(self._codes)
        self.rooms[code] = {
            "code": code,
            "startRadius": start_radius,
            "shrinkStepSec": shrink_step_sec,
            "shrinkAmount": shrink_amount,
            "startedAt": None,
            "createdAt": now,
        }
        return code

    async def start_room(self, code, now):
        if code not in self.rooms:
            raise RoomNotFound(code)
        room = self.rooms[code]
        if room["startedAt"] is None or room["startedAt"] < now:
            room["startedAt"] = now
        return room["startedAt"]

    async def get_room(self, code):
        if code not in self.rooms:
            raise RoomNotFound(code)
        return dict(self.rooms[code])

    async def list_rooms(self):
        return [dict(r) for r in self.rooms.values()]

    async def join_player(self, room, name, role, *, now):
        if room not in self.rooms:
            raise RoomNotFound(room)
        player = {
            "id": str(uuid.uuid4()),
            "room": room,
            "name": name,
            "role": role,
            "status": "ready",
            "lastSeen": now,
        }
        self.players[player["id"]] = player
        return dict(player)

    async def leave_player(self, player_id):
        self.locations.pop(player_id, None)
        return self.players.pop(player_id, None) is not None

    async def get_player(self, player_id):
        if player_id not in self.players:
            raise PlayerNotFound(player_id)
        return dict(self.players[player_id])

    async def set_player_status(self, player_id, status):
        self.status_writes.append((player_id, status))
        if player_id in self.players:
            self.players[player_id]["status"] = status

    async def upsert_location(self, player_id, lat, lng, now):
        if player_id not in self.players:
            raise PlayerNotFound(player_id)
        self.locations[player_id] = {"lat": lat, "lng": lng, "ts": now}
        self.players[player_id]["lastSeen"] = now
        return now

    async def get_room_snapshot(self, room):
        snapshot = []
        for p in self.players.values():
            if p["room"] != room:
                continue
            loc = self.locations.get(p["id"], {})
            snapshot.append({
                "id": p["id"],
                "name": p["name"],
                "role": p["role"],
                "status": p["status"],
                "lastSeen": p["lastSeen"],
                "lat": loc.get("lat"),
                "lng": loc.get("lng"),
                "locTs": loc.get("ts"),
            })
        return snapshot

    async def delete_stale_rooms(self, cutoff):
        stale = [
            code for code, room in self.rooms.items()
            if room["createdAt"] < cutoff
            and not any(p["room"] == code and (p["lastSeen"] or 0) >= cutoff for p in self.players.values())
        ]
        for code in stale:
            del self.rooms[code]
            for pid in [pid for pid, p in self.players.items() if p["room"] == code]:
                del self.players[pid]
                self.locations.pop(pid, None)
        return len(stale)


@pytest.fixture
def fake_store() -> FakeRoomStore:
    """Fresh in-memory store."""
    return FakeRoomStore()


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "streethunt.sqlite3")


@pytest.fixture
def client(db_path):
    """HTTP client against an app backed by a temporary SQLite file."""
    from main import create_app

    app = create_app(db_path, enable_maintenance=False)
    with TestClient(app) as test_client:
        yield test_client
