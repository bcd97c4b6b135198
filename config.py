import os
from pathlib import Path

# Path to the SQLite database file used by stores. Can be overridden
# using the STREETHUNT_DB_PATH environment variable.
DB_PATH = os.environ.get("STREETHUNT_DB_PATH", str(Path(__file__).parent / "db.sqlite3"))

# Catch threshold used when a state request does not supply catchMeters.
DEFAULT_CATCH_METERS = int(os.environ.get("STREETHUNT_CATCH_METERS", "30"))

CORS_ORIGINS = os.environ.get("STREETHUNT_CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.environ.get("STREETHUNT_LOG_LEVEL", "INFO")

# Rooms with no activity for this long are pruned by the maintenance job.
STALE_ROOM_HOURS = int(os.environ.get("STREETHUNT_STALE_ROOM_HOURS", "48"))
MAINTENANCE_ENABLED = os.environ.get("STREETHUNT_MAINTENANCE_ENABLED", "1") not in ("0", "false", "False")

PORT = int(os.environ.get("PORT", "4000"))
