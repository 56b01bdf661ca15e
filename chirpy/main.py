"""Chirpy - FastAPI Application Factory."""

import argparse
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from chirpy.api import api_router
from chirpy.api.metrics import admin_router
from chirpy.core import DatabaseError, get_database, settings, setup_logging
from chirpy.core.logging import get_logger
from chirpy.middleware import HitCounter, HitCounterMiddleware

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    db = get_database()
    db.ensure()
    logger.info(f"Record store at {db.path}")

    yield

    logger.info("Shutting down...")


def register_error_handlers(app: FastAPI) -> None:
    """Map record store failures to 500 without leaking the cause."""

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
        logger.error(
            f"Record store failure: {exc}",
            exc_info=exc,
            extra={"method": request.method, "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal storage error"},
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Short posts, users and sessions on a single JSON file",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.state.hit_counter = HitCounter()
    app.add_middleware(HitCounterMiddleware, counter=app.state.hit_counter, path_prefix="/app")

    # CORS middleware - MUST be outermost (added last in Starlette LIFO order)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "OPTIONS", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(api_router)  # API at /api
    app.include_router(admin_router)  # Admin pages at /admin

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/app", StaticFiles(directory=static_dir, html=True), name="app")
    else:
        logger.warning(f"Static directory {static_dir} not found; /app is not served")

    return app


# Application instance
app = create_app()


def main() -> None:
    """Run the server with uvicorn."""
    parser = argparse.ArgumentParser(description="Run the Chirpy server")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Start from an empty database (deletes the existing file)",
    )
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    args = parser.parse_args()

    setup_logging(
        level="DEBUG" if args.debug else settings.log_level,
        format_type=settings.log_format,
    )

    if args.debug:
        get_database().reset()
        logger.info("Debug mode: database reset")

    import uvicorn

    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
