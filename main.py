from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routes import rooms_router, players_router, state_router, nongame_router
from stores import init_stores, close_stores
from workers import create_scheduler
import config

logger = logging.getLogger(__name__)


def create_app(db_path: str | None = None, *, enable_maintenance: bool | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        db_path: SQLite file to use (defaults to config.DB_PATH)
        enable_maintenance: run the stale-room scheduler (defaults to config)
    """
    db_path = db_path or config.DB_PATH
    if enable_maintenance is None:
        enable_maintenance = config.MAINTENANCE_ENABLED

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = await init_stores(db_path)
        scheduler = None
        if enable_maintenance:
            scheduler = create_scheduler(store)
            scheduler.start()
        logger.info(f"Street Hunt API ready (DB: {db_path})")
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.shutdown(wait=False)
            await close_stores()

    app = FastAPI(title="Street Hunt API", lifespan=lifespan)

    # --- Middleware ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )

    # --- Error mapping ---
    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse({"ok": False, "error": "bad request", "detail": _error_fields(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse({"ok": False, "error": "internal error"}, status_code=500)

    # --- Register routes ---
    app.include_router(nongame_router)
    app.include_router(rooms_router)
    app.include_router(players_router)
    app.include_router(state_router)

    return app


def _error_fields(exc: RequestValidationError) -> list[str]:
    return [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]


logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
