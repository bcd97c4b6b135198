"""HTTP route modules (FastAPI routers) for the application.

This file explicitly exports the router objects provided by each
submodule so callers can do:

	from routes import rooms_router
	app.include_router(rooms_router)

Submodules should expose an `APIRouter` named `router`.
"""

from .rooms import router as rooms_router
from .players import router as players_router
from .state import router as state_router
from .nongame import router as nongame_router

__all__ = [
	"rooms_router",
	"players_router",
	"state_router",
	"nongame_router",
]
