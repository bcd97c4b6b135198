"""Validation and normalization helpers.

This module provides the lightweight input coercion used by request models
and route handlers. Values that clients send loosely (strings for numbers,
lowercase room codes, stray control characters) are normalized here.
"""
from typing import Any, Optional
import math
import regex as re


# Unicode control, format and unassigned code points never belong in a display name.
CONTROL_CHARS_RE = re.compile(r"[\p{Cc}\p{Cf}\p{Cn}]+", flags=re.UNICODE)
# Leading integer of a string: "800px" is 800.
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def clamp(value: int, lo: int, hi: int) -> int:
	return max(lo, min(hi, value))


def parse_int(value: Any, default: int) -> int:
	"""Parse a loosely typed integer, falling back to `default`.

	Empty, zero, missing and non-numeric values all yield the default.
	Numbers are truncated toward zero. Strings use their leading integer,
	so "800abc" is 800 and "30.7" is 30.
	"""
	if value is None or value == "" or isinstance(value, bool):
		return default
	if isinstance(value, str):
		match = LEADING_INT_RE.match(value)
		number = int(match.group(1)) if match else 0
	elif isinstance(value, (int, float)) and math.isfinite(value):
		number = int(value)
	else:
		return default
	return number or default


def parse_catch_meters(value: Optional[str], default: int) -> float:
	"""Parse the `catchMeters` query parameter; absent or non-numeric means `default`."""
	if value is None:
		return float(default)
	try:
		number = float(value)
	except (TypeError, ValueError):
		return float(default)
	if not math.isfinite(number):
		return float(default)
	return number


def is_finite_number(value: Any) -> bool:
	if value is None or isinstance(value, bool):
		return False
	try:
		return math.isfinite(float(value))
	except (TypeError, ValueError):
		return False


def normalize_room_code(code: Optional[str]) -> str:
	"""Room codes are case-insensitive; upper-case is canonical."""
	return (code or "").strip().upper()


def strip_control_chars(s: str) -> str:
	return CONTROL_CHARS_RE.sub("", s)
