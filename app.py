"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the repository and services, registers routers and error
handlers, and prepares the data file on startup.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.controllers.booking_controller import router as booking_router
from backend.controllers.room_controller import router as room_router
from backend.repository.data_repository import DataRepository
from backend.services.booking_service import BookingService
from backend.services.history_service import HistoryService
from backend.services.room_service import RoomInventoryService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


ENDPOINTS = [
    "GET  /rooms",
    "GET  /rooms/sorted",
    "GET  /rooms/filter?hostelType=&hostelNumber=&seater=",
    "GET  /bookings",
    "GET  /history",
    "GET  /history/summary",
    "GET  /waiting-queue",
    "POST /add-room",
    "POST /book/:id",
    "DELETE /cancel/:bookingId",
    "DELETE /rooms/:id",
]

# Starlette's own messages for routes that do not exist.
_ROUTING_DETAILS = {"Not Found", "Method Not Allowed"}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services share one repository and are injected via app.state, so every
    dependency is traceable from this function.
    """
    settings = settings or get_settings()

    # --- Repository (single JSON state file) ---
    repository = DataRepository(settings)

    # --- Services (business logic, no direct file access) ---
    room_service = RoomInventoryService(repository=repository, settings=settings)
    booking_service = BookingService(repository=repository, settings=settings)
    history_service = HistoryService(repository=repository, settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run startup initialization before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.0fms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    _register_error_handlers(app)

    @app.get("/", tags=["meta"])
    async def index() -> dict[str, Any]:
        return {"message": settings.app_name, "endpoints": ENDPOINTS}

    # --- Routers ---
    app.include_router(room_router)
    app.include_router(booking_router)

    # --- Inject services into app.state for dependency resolution ---
    app.state.settings = settings
    app.state.repository = repository
    app.state.room_service = room_service
    app.state.booking_service = booking_service
    app.state.history_service = history_service

    return app


def _register_error_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405) and exc.detail in _ROUTING_DETAILS:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": "Endpoint not found"},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid {location or 'request'}: {first.get('msg', 'invalid value')}"
        else:
            message = "Invalid request"
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message},
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def _startup(app: FastAPI) -> None:
    """
    Idempotent startup sequence. Safe to re-run on server restarts.

    The data file must exist before optional demo seeding reads it.
    """
    repository: DataRepository = app.state.repository
    settings: Settings = app.state.settings

    logger.info("Startup: preparing data file %s", repository.data_path)
    repository.initialize_storage()

    if settings.seed_demo_rooms:
        logger.info("Startup: seeding demo rooms (skipped if rooms exist)")
        repository.seed_demo_rooms_if_empty()

    logger.info("Startup complete, system ready")


# Module-level app object for uvicorn
app = create_app()
