"""
FastAPI application for the in-memory todo service.

create_app() builds a self-contained application: its own store, the todo
router, middleware and exception handlers. The module-level ``app`` is the
instance served by ``uvicorn todo_service.main:app``.
"""
from __future__ import annotations

import os
import time
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import TodoServiceError
from .logging_config import get_logger, setup_logging
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .store import InMemoryStore, Store
from .utils import error_envelope

logger = get_logger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for in-memory Todo items."},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info("Starting todo service in %s mode", settings.app_env)
    if settings.seed_data:
        app.state.store.seed()
    yield
    logger.info("Shutting down todo service")


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(TodoServiceError)
    async def todo_service_error_handler(request: Request, exc: TodoServiceError) -> JSONResponse:
        """Map store and handler errors to their status with the failure envelope."""
        logger.info("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return request validation errors (malformed JSON, wrongly typed fields) as 400.

        Response format:
            {
                "code": -1,
                "message": "request validation failed",
                "errors": [... pydantic/fastapi error details ...]
            }
        """
        return JSONResponse(
            status_code=400,
            content=error_envelope(
                "request validation failed", errors=jsonable_encoder(exc.errors())
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            message = f"route {request.url.path} does not exist"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Handle uncaught exceptions. The error text and stack trace are only
        included in development mode.
        """
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        extra = {}
        if settings.is_development():
            extra = {
                "error": str(exc),
                "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            }
        return JSONResponse(status_code=500, content=error_envelope("internal server error", **extra))


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        store: Store to serve; a fresh InMemoryStore when omitted.

    Returns:
        A configured FastAPI instance. Sample data is seeded on startup when
        settings.seed_data is true.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Todo Service",
        description="Minimal CRUD backend keeping todo items in process memory.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else InMemoryStore()

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    _register_exception_handlers(app, settings)

    # PUBLIC_INTERFACE
    @app.get(f"{settings.api_prefix}/health", summary="Health Check", tags=["health"])
    def health_check(store: Store = Depends(todos_router.get_store)) -> dict:
        """
        Health check endpoint.

        Returns:
            A JSON object with service status, the current time and store statistics.
        """
        return {
            "status": "ok",
            "message": "todo service is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "stats": store.stats(),
        }

    app.include_router(todos_router.router, prefix=settings.api_prefix)

    # Mounted last; API routes take precedence
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        logger.info("Serving static files from %s", settings.static_dir)
    else:

        @app.get("/", summary="Service Info", tags=["health"])
        def root() -> dict:
            return {
                "message": "Todo Service",
                "endpoints": [
                    f"GET {settings.api_prefix}/todos",
                    f"GET {settings.api_prefix}/todo/{{id}}",
                    f"POST {settings.api_prefix}/todo/create",
                    f"PUT {settings.api_prefix}/todo/update/{{id}}",
                    f"DELETE {settings.api_prefix}/todo/delete/{{id}}",
                ],
            }

    return app


app = create_app()
