from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from typing import Optional

from stores import RoomStore, get_room_store, RoomNotFound
from services import compute_room_state
from utils import now_ms, normalize_room_code, parse_catch_meters
import config

router = APIRouter()


@router.get("/state/{room}")
async def get_state(
	room: str,
	player_id: Optional[str] = Query(None, alias="playerId"),
	catch_meters_raw: Optional[str] = Query(None, alias="catchMeters"),
	store: RoomStore = Depends(get_room_store),
):
	"""Poll a room's state as seen by `player_id` (anonymous when omitted).

	Not a pure read: runners caught during this pass are persisted.
	"""
	code = normalize_room_code(room)
	catch_meters = parse_catch_meters(catch_meters_raw, config.DEFAULT_CATCH_METERS)

	try:
		state = await compute_room_state(
			store,
			code,
			viewer_id=player_id or None,
			catch_meters=catch_meters,
			now=now_ms(),
		)
	except RoomNotFound:
		return JSONResponse({"ok": False, "error": "room not found"}, status_code=404)

	return {"ok": True, **state, "now": now_ms()}
