from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from models import CreateRoomRequest
from stores import (
	RoomStore,
	get_room_store,
	RoomNotFound,
	RoomCodeExhausted,
)
from services import room_zone_radius
from utils import now_ms, normalize_room_code

logger = logging.getLogger(__name__)

router = APIRouter()


def _public_room(room: dict) -> dict:
	return {
		"code": room["code"],
		"startRadius": room["startRadius"],
		"shrinkStepSec": room["shrinkStepSec"],
		"shrinkAmount": room["shrinkAmount"],
		"startedAt": room["startedAt"],
	}


@router.post("/rooms")
async def create_room(req: Optional[CreateRoomRequest] = None, store: RoomStore = Depends(get_room_store)):
	"""Create a room; settings are clamped by the request model."""
	req = req or CreateRoomRequest()
	try:
		code = await store.create_room(
			req.start_radius,
			req.shrink_step_sec,
			req.shrink_amount,
			now=now_ms(),
		)
	except RoomCodeExhausted as exc:
		logger.error(f"Failed to allocate room code: {exc}")
		return JSONResponse({"ok": False, "error": "could not allocate room code"}, status_code=503)

	logger.info(f"Room {code} created")
	return {
		"ok": True,
		"code": code,
		"startRadius": req.start_radius,
		"shrinkStepSec": req.shrink_step_sec,
		"shrinkAmount": req.shrink_amount,
	}


@router.get("/rooms")
async def list_rooms(store: RoomStore = Depends(get_room_store)):
	rooms = await store.list_rooms()
	return {"ok": True, "rooms": [_public_room(r) for r in rooms]}


@router.get("/rooms/{code}")
async def get_room(code: str, store: RoomStore = Depends(get_room_store)):
	code = normalize_room_code(code)
	try:
		room = await store.get_room(code)
	except RoomNotFound:
		return JSONResponse({"ok": False, "error": "room not found"}, status_code=404)

	return {"ok": True, "room": {**_public_room(room), "zoneRadius": room_zone_radius(room, now_ms())}}


@router.post("/rooms/{code}/start")
async def start_room(code: str, store: RoomStore = Depends(get_room_store)):
	code = normalize_room_code(code)
	try:
		started_at = await store.start_room(code, now_ms())
	except RoomNotFound:
		logger.warning(f"Attempt to start non-existent room: {code}")
		return JSONResponse({"ok": False, "error": "room not found"}, status_code=404)

	return {"ok": True, "startedAt": started_at}
