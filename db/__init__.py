"""Database package helpers.

Expose connection and schema helpers so callers can import
from `db` directly (e.g. `from db import connect, init_db`).
"""

from .connections import connect, init_db, ensure_parent_dir, SCHEMA_PATH

__all__ = ["connect", "init_db", "ensure_parent_dir", "SCHEMA_PATH"]
