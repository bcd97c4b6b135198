"""Utility helpers used across the project.

Exports:
- time helpers: `now_ms`, `hours_ago_ms`
- validation helpers: `clamp`, `parse_int`, `parse_catch_meters`,
  `is_finite_number`, `normalize_room_code`, `strip_control_chars`
"""

from .time import now_ms, hours_ago_ms
from .validation import (
	clamp,
	parse_int,
	parse_catch_meters,
	is_finite_number,
	normalize_room_code,
	strip_control_chars,
)

__all__ = [
	"now_ms",
	"hours_ago_ms",
	"clamp",
	"parse_int",
	"parse_catch_meters",
	"is_finite_number",
	"normalize_room_code",
	"strip_control_chars",
]
