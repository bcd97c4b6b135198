"""Time utilities.

Every timestamp stored or sent by the service is an integer count of
milliseconds since the Unix epoch.
"""
from datetime import datetime, timezone


def now_ms() -> int:
	"""Return the current UTC time in epoch milliseconds."""
	return int(datetime.now(timezone.utc).timestamp() * 1000)


def hours_ago_ms(hours: float, *, now: int | None = None) -> int:
	"""Return the epoch-millisecond timestamp `hours` before `now`."""
	if now is None:
		now = now_ms()
	return now - int(hours * 3600 * 1000)
