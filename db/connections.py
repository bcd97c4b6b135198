from pathlib import Path
from typing import Dict, Optional
import aiosqlite


SCHEMA_PATH = Path(__file__).parent / "schema.sql"


async def connect(db_path: str, pragmas: Optional[Dict[str, str]] = None) -> aiosqlite.Connection:
    """Open an aiosqlite connection and apply sensible pragmas.

    - Sets `row_factory` to `aiosqlite.Row` for named access.
    - Enables foreign keys so player/location deletes cascade.
    - Disables implicit transactions; writers issue `BEGIN IMMEDIATE` themselves.
    - Applies any additional PRAGMA settings supplied in `pragmas`.

    Returns an open connection; caller is responsible for closing it.
    """
    conn = await aiosqlite.connect(db_path, timeout=30.0, isolation_level=None)
    conn.row_factory = aiosqlite.Row

    await conn.execute("PRAGMA foreign_keys = ON")
    if pragmas:
        for k, v in pragmas.items():
            await conn.execute(f"PRAGMA {k} = {v}")

    return conn


async def init_db(conn: aiosqlite.Connection, schema_path: Optional[str] = None) -> None:
    """Apply the SQL schema to an open connection.

    If `schema_path` is not provided the bundled `db/schema.sql` is used.
    The schema only contains `IF NOT EXISTS` statements so this is safe to
    run against an existing database.
    """
    schema_file = Path(schema_path) if schema_path else SCHEMA_PATH

    if not schema_file.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_file}")

    await conn.executescript(schema_file.read_text())
    await conn.commit()


def ensure_parent_dir(db_path: str) -> None:
    """Create the directory holding `db_path` if it is missing."""
    if db_path == ":memory:":
        return
    parent = Path(db_path).parent
    if not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)
