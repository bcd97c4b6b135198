"""
Game state engine.

Everything a state poll needs is derived here from a fresh store snapshot:
the live zone radius, catch detection and the per-viewer projection.

`compute_room_state` is read-and-conditionally-write: runners newly caught
during the pass are persisted through the store before the projection is
built. Repeated calls converge because `ready -> caught` is the only
transition ever written.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from models.domain_models import (
    NearestOpponent,
    PlayerWithLocation,
    ROLE_HUNTER,
    ROLE_RUNNER,
    STATUS_CAUGHT,
)
from stores import RoomStore
from .zone import distance_meters, room_zone_radius

logger = logging.getLogger(__name__)


def _has_location(p: PlayerWithLocation) -> bool:
    return p.get("lat") is not None and p.get("lng") is not None


def _distance_between(a: PlayerWithLocation, b: PlayerWithLocation) -> float:
    return distance_meters(a.get("lat"), a.get("lng"), b.get("lat"), b.get("lng"))


def _rounded(distance: float) -> Optional[int]:
    """Wire form of a distance: whole meters, or None when unknown."""
    if math.isinf(distance):
        return None
    return int(round(distance))


# --- Catch detection ---

async def detect_catches(
    store: RoomStore,
    players: Iterable[PlayerWithLocation],
    catch_meters: float,
) -> List[str]:
    """Mark runners within `catch_meters` of any hunter as caught.

    Mutates the snapshot in place and writes each transition through to the
    store as soon as it is found. Already-caught runners are skipped, so a
    runner is written at most once per pass. Returns the newly caught ids.
    """
    players = list(players)
    caught: List[str] = []

    for hunter in players:
        if hunter["role"] != ROLE_HUNTER or not _has_location(hunter):
            continue
        for runner in players:
            if runner["id"] == hunter["id"]:
                continue
            if runner["role"] != ROLE_RUNNER or not _has_location(runner):
                continue
            if runner["status"] == STATUS_CAUGHT:
                continue
            if _distance_between(hunter, runner) <= catch_meters:
                runner["status"] = STATUS_CAUGHT
                await store.set_player_status(runner["id"], STATUS_CAUGHT)
                caught.append(runner["id"])
                logger.info(f"Runner {runner['id']} caught by hunter {hunter['id']}")

    return caught


# --- Nearest opponent ---

def nearest_opponents(players: Iterable[PlayerWithLocation]) -> Dict[str, NearestOpponent]:
    """Return, for every player, the closest player of the opposite role."""
    players = list(players)
    nearest: Dict[str, NearestOpponent] = {}

    for p in players:
        best: NearestOpponent = {"id": None, "dist": math.inf}
        for q in players:
            if q["id"] == p["id"] or q["role"] == p["role"] or not _has_location(q):
                continue
            d = _distance_between(p, q)
            if d < best["dist"]:
                best = {"id": q["id"], "dist": d}
        nearest[p["id"]] = best

    return nearest


# --- Visibility projection ---

def project_player(p: PlayerWithLocation, viewer: Optional[PlayerWithLocation]) -> Dict[str, Any]:
    """Return what `viewer` is allowed to see of player `p`.

    Hunters see everyone's coordinates. Runners see their own position,
    only a distance for hunters and bare identity for other runners.
    Anonymous viewers never see coordinates or distances.
    """
    base = {"id": p["id"], "name": p["name"], "role": p["role"], "status": p["status"]}

    if viewer is None:
        return base

    if viewer["role"] == ROLE_HUNTER:
        return {
            **base,
            "lat": p.get("lat"),
            "lng": p.get("lng"),
            "lastSeen": p.get("lastSeen"),
            "distanceToViewer": _rounded(_distance_between(viewer, p)),
        }

    if p["id"] == viewer["id"]:
        return {**base, "lat": p.get("lat"), "lng": p.get("lng"), "lastSeen": p.get("lastSeen")}

    if p["role"] == ROLE_HUNTER:
        # coordinates withheld
        return {
            **base,
            "distanceToRunner": _rounded(_distance_between(viewer, p)),
            "lastSeen": p.get("lastSeen"),
        }

    return {**base, "lastSeen": p.get("lastSeen")}


def project_players(
    players: Iterable[PlayerWithLocation],
    viewer_id: Optional[str],
) -> List[Dict[str, Any]]:
    """Project the snapshot for `viewer_id`, preserving snapshot order.

    An unknown `viewer_id` is treated as an anonymous viewer.
    """
    players = list(players)
    viewer = next((p for p in players if viewer_id and p["id"] == viewer_id), None)
    return [project_player(p, viewer) for p in players]


# --- Full state pass ---

async def compute_room_state(
    store: RoomStore,
    code: str,
    *,
    viewer_id: Optional[str],
    catch_meters: float,
    now: int,
) -> Dict[str, Any]:
    """Load a snapshot, run catch detection and build the viewer's view.

    Raises:
        RoomNotFound: before any write if the room does not exist.
    """
    room = await store.get_room(code)
    radius = room_zone_radius(room, now)

    players = await store.get_room_snapshot(code)
    caught = await detect_catches(store, players, catch_meters)
    if caught:
        logger.info(f"Room {code}: {len(caught)} runner(s) caught this pass")

    nearest = nearest_opponents(players)
    projected = project_players(players, viewer_id)

    state: Dict[str, Any] = {
        "room": {
            "code": room["code"],
            "startRadius": room["startRadius"],
            "shrinkStepSec": room["shrinkStepSec"],
            "shrinkAmount": room["shrinkAmount"],
            "startedAt": room["startedAt"],
            "zoneRadius": radius,
        },
        "players": projected,
    }

    if viewer_id and viewer_id in nearest:
        viewer = next(p for p in players if p["id"] == viewer_id)
        state["viewer"] = {
            "id": viewer_id,
            "role": viewer["role"],
            "status": viewer["status"],
            "nearestOpponentDistance": _rounded(nearest[viewer_id]["dist"]),
        }

    return state
