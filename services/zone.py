# zone.py
import math

from models.domain_models import MIN_ZONE_RADIUS

EARTH_RADIUS_M = 6_371_000


def zone_radius(
    start_radius: int,
    shrink_step_sec: int,
    shrink_amount: int,
    started_at: int | None,
    now: int,
) -> int:
    """Return the live zone radius in meters.

    Before the room is started the radius is `start_radius`. Afterwards it
    drops by `shrink_amount` for every full `shrink_step_sec` elapsed, never
    below MIN_ZONE_RADIUS. Derived from `started_at` on every call.
    """
    if started_at is None:
        return start_radius

    elapsed_ms = max(0, now - started_at)
    steps = elapsed_ms // (max(1, shrink_step_sec) * 1000)
    return max(MIN_ZONE_RADIUS, start_radius - steps * shrink_amount)


def room_zone_radius(room: dict, now: int) -> int:
    return zone_radius(
        room["startRadius"],
        room["shrinkStepSec"],
        room["shrinkAmount"],
        room.get("startedAt"),
        now,
    )


def distance_meters(
    a_lat: float | None,
    a_lng: float | None,
    b_lat: float | None,
    b_lng: float | None,
) -> float:
    """Great-circle (haversine) distance in meters.

    Any missing coordinate makes the distance infinite, so unknown positions
    never catch and never win a nearest-opponent comparison.
    """
    if a_lat is None or a_lng is None or b_lat is None or b_lng is None:
        return math.inf

    d_lat = math.radians(b_lat - a_lat)
    d_lng = math.radians(b_lng - a_lng)
    lat1 = math.radians(a_lat)
    lat2 = math.radians(b_lat)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # rounding can push h just past 1 for antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
