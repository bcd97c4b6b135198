import asyncio
import logging
import secrets
import sqlite3
import string
import uuid

import aiosqlite

from db import connect, init_db, ensure_parent_dir
from models.domain_models import (
    Room,
    Player,
    PlayerWithLocation,
    Role,
    Status,
    STATUS_READY,
)
from .exceptions import (
    RoomNotFound,
    PlayerNotFound,
    RoomCodeExhausted,
    UnexpectedResult,
)
from .room_store import RoomStore

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
ROOM_CODE_LENGTH = 6
ROOM_CODE_ATTEMPTS = 5


def generate_room_code(length: int = ROOM_CODE_LENGTH) -> str:
    """Generate a short, upper-case room code."""
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


def _room_from_row(row: aiosqlite.Row) -> Room:
    return {
        "code": row["code"],
        "startRadius": row["start_radius"],
        "shrinkStepSec": row["shrink_step_sec"],
        "shrinkAmount": row["shrink_amount"],
        "startedAt": row["started_at"],
        "createdAt": row["created_at"],
    }


def _player_from_row(row: aiosqlite.Row) -> Player:
    return {
        "id": row["id"],
        "room": row["room"],
        "name": row["name"],
        "role": row["role"],
        "status": row["status"] or STATUS_READY,
        "lastSeen": row["last_seen"],
    }


class SqliteRoomStore(RoomStore):
    """SQLite-based implementation of RoomStore.

    Holds a single aiosqlite connection. Every write takes `_write_lock` so a
    single-statement autocommit write can never land inside another
    coroutine's `BEGIN IMMEDIATE` transaction.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.db: aiosqlite.Connection | None = None
        self._write_lock: asyncio.Lock | None = None
        logger.info(f"[STORE] SqliteRoomStore initialized with db_path: {db_path}")

    async def init(self) -> None:
        """Open the connection and apply the schema. Call this after construction."""
        ensure_parent_dir(self.db_path)
        self.db = await connect(self.db_path)
        await init_db(self.db)
        self._write_lock = asyncio.Lock()
        logger.info(f"[STORE] Database connection established to {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self.db:
            await self.db.close()
            self.db = None

    async def _rollback(self) -> None:
        # Cancellation included; a transaction left open blocks every later BEGIN
        if self.db.in_transaction:
            await self.db.rollback()
            logger.warning("[STORE] Rolled back failed transaction")

    # -------------------------------------------------
    # Rooms
    # -------------------------------------------------

    async def create_room(
        self,
        start_radius: int,
        shrink_step_sec: int,
        shrink_amount: int,
        *,
        now: int,
    ) -> str:
        # Raises: RoomCodeExhausted
        for _ in range(ROOM_CODE_ATTEMPTS):
            code = generate_room_code()
            try:
                async with self._write_lock:
                    await self.db.execute(
                        """
                        INSERT INTO rooms (
                            code, start_radius, shrink_step_sec, shrink_amount, started_at, created_at
                        ) VALUES (?, ?, ?, ?, NULL, ?)
                        """,
                        (code, start_radius, shrink_step_sec, shrink_amount, now),
                    )
            except sqlite3.IntegrityError:
                logger.warning(f"[STORE] Room code collision on {code}, retrying")
                continue
            logger.info(f"[STORE] Created room {code}")
            return code

        raise RoomCodeExhausted(f"No free room code after {ROOM_CODE_ATTEMPTS} attempts")

    async def start_room(self, code: str, now: int) -> int:
        # Raises: RoomNotFound
        async with self._write_lock:
            await self.db.execute("BEGIN IMMEDIATE")
            try:
                # Never move started_at backwards, even if clocks disagree
                cursor = await self.db.execute(
                    """
                    UPDATE rooms
                    SET started_at = CASE
                        WHEN started_at IS NULL OR started_at < ? THEN ?
                        ELSE started_at
                    END
                    WHERE code = ?
                    """,
                    (now, now, code),
                )
                if cursor.rowcount == 0:
                    raise RoomNotFound(code)

                cur = await self.db.execute("SELECT started_at FROM rooms WHERE code = ?", (code,))
                row = await cur.fetchone()
                await self.db.commit()
            except BaseException:
                await self._rollback()
                raise

        logger.info(f"[STORE] Room {code} started at {row['started_at']}")
        return row["started_at"]

    async def get_room(self, code: str) -> Room:
        # Raises: RoomNotFound
        cur = await self.db.execute("SELECT * FROM rooms WHERE code = ?", (code,))
        row = await cur.fetchone()
        if row is None:
            raise RoomNotFound(code)
        return _room_from_row(row)

    async def list_rooms(self) -> list[Room]:
        cur = await self.db.execute("SELECT * FROM rooms ORDER BY created_at, code")
        return [_room_from_row(r) for r in await cur.fetchall()]

    # -------------------------------------------------
    # Players
    # -------------------------------------------------

    async def join_player(
        self,
        room: str,
        name: str,
        role: Role,
        *,
        now: int,
    ) -> Player:
        # Raises: RoomNotFound
        player_id = str(uuid.uuid4())
        try:
            async with self._write_lock:
                await self.db.execute(
                    """
                    INSERT INTO players (id, room, name, role, status, last_seen)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (player_id, room, name, role, STATUS_READY, now),
                )
        except sqlite3.IntegrityError as exc:
            # The room FK is the only constraint a fresh uuid can violate
            cur = await self.db.execute("SELECT 1 FROM rooms WHERE code = ?", (room,))
            if await cur.fetchone() is None:
                raise RoomNotFound(room) from exc
            raise UnexpectedResult("Unexpected integrity error during join") from exc

        logger.info(f"[STORE] Player {player_id} joined room {room} as {role}")
        return {
            "id": player_id,
            "room": room,
            "name": name,
            "role": role,
            "status": STATUS_READY,
            "lastSeen": now,
        }

    async def leave_player(self, player_id: str) -> bool:
        async with self._write_lock:
            await self.db.execute("BEGIN IMMEDIATE")
            try:
                await self.db.execute("DELETE FROM locations WHERE player_id = ?", (player_id,))
                cursor = await self.db.execute("DELETE FROM players WHERE id = ?", (player_id,))
                removed = cursor.rowcount > 0
                await self.db.commit()
            except BaseException:
                await self._rollback()
                raise

        if removed:
            logger.info(f"[STORE] Player {player_id} left")
        return removed

    async def get_player(self, player_id: str) -> Player:
        # Raises: PlayerNotFound
        cur = await self.db.execute("SELECT * FROM players WHERE id = ?", (player_id,))
        row = await cur.fetchone()
        if row is None:
            raise PlayerNotFound(player_id)
        return _player_from_row(row)

    async def set_player_status(self, player_id: str, status: Status) -> None:
        async with self._write_lock:
            await self.db.execute(
                "UPDATE players SET status = ? WHERE id = ?",
                (status, player_id),
            )

    # -------------------------------------------------
    # Locations
    # -------------------------------------------------

    async def upsert_location(
        self,
        player_id: str,
        lat: float,
        lng: float,
        now: int,
    ) -> int:
        # Raises: PlayerNotFound
        async with self._write_lock:
            await self.db.execute("BEGIN IMMEDIATE")
            try:
                cursor = await self.db.execute(
                    "UPDATE players SET last_seen = ? WHERE id = ?",
                    (now, player_id),
                )
                if cursor.rowcount == 0:
                    raise PlayerNotFound(player_id)

                await self.db.execute(
                    """
                    INSERT INTO locations (player_id, lat, lng, ts) VALUES (?, ?, ?, ?)
                    ON CONFLICT(player_id) DO UPDATE SET lat = excluded.lat, lng = excluded.lng, ts = excluded.ts
                    """,
                    (player_id, lat, lng, now),
                )
                await self.db.commit()
            except BaseException:
                await self._rollback()
                raise
        return now

    # -------------------------------------------------
    # Read-side queries
    # -------------------------------------------------

    async def get_room_snapshot(self, room: str) -> list[PlayerWithLocation]:
        cur = await self.db.execute(
            """
            SELECT p.id, p.name, p.role, p.status, p.last_seen, l.lat, l.lng, l.ts
            FROM players p LEFT JOIN locations l ON p.id = l.player_id
            WHERE p.room = ?
            ORDER BY p.rowid
            """,
            (room,),
        )
        return [
            {
                "id": r["id"],
                "name": r["name"],
                "role": r["role"],
                "status": r["status"] or STATUS_READY,
                "lastSeen": r["last_seen"],
                "lat": r["lat"],
                "lng": r["lng"],
                "locTs": r["ts"],
            }
            for r in await cur.fetchall()
        ]

    # -------------------------------------------------
    # Maintenance
    # -------------------------------------------------

    async def delete_stale_rooms(self, cutoff: int) -> int:
        # Players and locations go with the room through ON DELETE CASCADE
        async with self._write_lock:
            cursor = await self.db.execute(
                """
                DELETE FROM rooms
                WHERE created_at < ?
                  AND NOT EXISTS (
                    SELECT 1 FROM players p
                    WHERE p.room = rooms.code AND p.last_seen >= ?
                  )
                """,
                (cutoff, cutoff),
            )
            deleted_count = cursor.rowcount
        logger.info(f"[STORE] Deleted {deleted_count} stale rooms (cutoff={cutoff})")
        return deleted_count
