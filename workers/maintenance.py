"""Periodic maintenance jobs run by the in-process scheduler."""
import logging
from datetime import datetime, UTC
from typing import Any, Dict

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from pytz import timezone

from stores import RoomStore, StoreError
from utils import hours_ago_ms
import config

logger = logging.getLogger(__name__)


async def prune_stale_rooms(store: RoomStore, inactivity_hours: float = config.STALE_ROOM_HOURS) -> Dict[str, Any]:
    """
    Delete rooms with no activity for `inactivity_hours`.

    Returns:
        dict: {
            "status": "success" | "failure",
            "deleted_count": int,
            "timestamp": str,
        }
    """
    logger.info(f"Starting prune_stale_rooms (inactivity_hours={inactivity_hours})")

    try:
        deleted_count = await store.delete_stale_rooms(hours_ago_ms(inactivity_hours))
    except StoreError as exc:
        logger.error(f"prune_stale_rooms failed: {exc.__class__.__name__}: {exc}", exc_info=True)
        return {
            "status": "failure",
            "error": exc.__class__.__name__,
            "message": str(exc),
            "timestamp": datetime.now(UTC).isoformat(),
        }

    result = {
        "status": "success",
        "deleted_count": deleted_count,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    logger.info(f"prune_stale_rooms completed: {result}")
    return result


def create_scheduler(store: RoomStore) -> AsyncIOScheduler:
    """Build (but do not start) the scheduler that owns the maintenance jobs."""
    scheduler = AsyncIOScheduler(timezone=timezone("UTC"))
    scheduler.add_job(
        prune_stale_rooms,
        trigger="cron",
        minute=0,  # hourly
        args=[store],
        id="prune-stale-rooms",
        replace_existing=True,
    )
    return scheduler
