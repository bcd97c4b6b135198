from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from models import JoinRequest, LeaveRequest, LocationRequest
from stores import (
	RoomStore,
	get_room_store,
	RoomNotFound,
	PlayerNotFound,
)
from utils import now_ms, is_finite_number

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/join")
async def join(req: JoinRequest, store: RoomStore = Depends(get_room_store)):
	if not req.room:
		return JSONResponse({"ok": False, "error": "room required"}, status_code=400)

	try:
		player = await store.join_player(req.room, req.name, req.role, now=now_ms())
	except RoomNotFound:
		logger.warning(f"Attempt to join non-existent room: {req.room}")
		return JSONResponse({"ok": False, "error": "room not found"}, status_code=404)

	return {
		"ok": True,
		"id": player["id"],
		"name": player["name"],
		"role": player["role"],
		"room": player["room"],
	}


@router.post("/leave")
async def leave(req: LeaveRequest, store: RoomStore = Depends(get_room_store)):
	"""Remove a player and its location. Leaving twice is not an error."""
	if not req.player_id:
		return JSONResponse({"ok": False, "error": "playerId required"}, status_code=400)

	await store.leave_player(req.player_id)
	return {"ok": True}


@router.post("/location")
async def update_location(req: LocationRequest, store: RoomStore = Depends(get_room_store)):
	if not req.player_id or not is_finite_number(req.lat) or not is_finite_number(req.lng):
		return JSONResponse({"ok": False, "error": "missing fields"}, status_code=400)

	try:
		ts = await store.upsert_location(req.player_id, req.lat, req.lng, now_ms())
	except PlayerNotFound:
		logger.warning(f"Location update for unknown player: {req.player_id}")
		return JSONResponse({"ok": False, "error": "player not found"}, status_code=404)

	return {"ok": True, "ts": ts}
