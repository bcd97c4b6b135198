"""Workers package: background maintenance jobs.

Public API:
- `prune_stale_rooms`: delete rooms nobody has touched for a while
- `create_scheduler`: APScheduler instance that runs the jobs periodically
"""

from .maintenance import prune_stale_rooms, create_scheduler

__all__ = [
    "prune_stale_rooms",
    "create_scheduler",
]
