"""
FastAPI Service - Main entry point for the Weekly Planner API.
- Weeks and tasks over REST and GraphQL, both backed by one PlannerService
- MongoDB for data persistence, opened and closed by the lifespan
- File uploads to a local directory
- WebSocket hook broadcasting change events
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status as http_status
from starlette.exceptions import HTTPException as StarletteHTTPException

from weekplanner.core.config import Settings, get_settings
from weekplanner.core.database import MongoStore
from weekplanner.core.errors import PlannerError, ValidationError
from weekplanner.core.logger import logger
from weekplanner.internal.api.graphql import create_graphql_router
from weekplanner.internal.api.routes import (
    health_router,
    socket_router,
    task_router,
    week_router,
)
from weekplanner.internal.api.utils import error_response
from weekplanner.repositories import TaskRepository, WeekRepository
from weekplanner.services import (
    AttachmentBinder,
    ConnectionNotifier,
    LocalFileStorage,
    PlannerService,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.
    Opens the store on startup and closes it on shutdown.
    """
    settings: Settings = app.state.settings
    store: MongoStore = app.state.store

    logger.info(
        f"========== Starting {settings.app_name} v{settings.app_version} API service =========="
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"API: {settings.api_host}:{settings.api_port}, GraphQL: {settings.graphql_path}")

    await store.connect()
    await store.create_indexes()

    logger.info(f"========== {settings.app_name} API service started successfully ==========")

    try:
        yield
    finally:
        logger.info("========== Shutting down API service ==========")
        await store.disconnect()
        logger.info("========== API service stopped successfully ==========")


def _format_loc(loc) -> str:
    return ".".join(str(part) for part in loc if part != "body")


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PlannerError)
    async def planner_exception_handler(request: Request, exc: PlannerError):
        """Map planner errors to their status code with the standard envelope."""
        logger.error(f"{exc.code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message=exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle body validation errors with standard response format."""
        error_msg = "; ".join(
            f"{_format_loc(e['loc'])}: {e['msg']}" if _format_loc(e["loc"]) else e["msg"]
            for e in exc.errors()
        )
        logger.error(f"Validation error: {error_msg}")
        return JSONResponse(
            status_code=ValidationError.status_code,
            content=error_response(message=f"Validation error: {error_msg}"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with standard response format."""
        logger.error(f"HTTP error: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message=str(exc.detail)),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions with standard response format."""
        logger.error(f"Unhandled exception: {exc}")
        logger.exception("Exception details:")
        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response(message=f"Internal server error: {exc}"),
        )


def create_app(
    settings: Optional[Settings] = None, store: Optional[MongoStore] = None
) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        store: Store handle to use; a new MongoStore is built when omitted

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()
    store = store or MongoStore(settings)
    logger.info("Creating FastAPI application...")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Weekly planner: weeks and tasks over REST and GraphQL.",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Weeks", "description": "Week CRUD. Updates replace the whole week."},
            {"name": "Tasks", "description": "Task CRUD, uploads and attachments. Updates merge."},
            {"name": "Health", "description": "Service and MongoDB health."},
            {"name": "Live", "description": "WebSocket change notifications."},
        ],
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    notifier = ConnectionNotifier(send_timeout=settings.notify_send_timeout)
    planner = PlannerService(
        WeekRepository(store),
        TaskRepository(store),
        notifier if settings.notify_changes else None,
    )
    file_storage = LocalFileStorage(settings.upload_dir)

    app.state.settings = settings
    app.state.store = store
    app.state.notifier = notifier
    app.state.planner = planner
    app.state.file_storage = file_storage
    app.state.attachment_binder = AttachmentBinder(file_storage, planner)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(week_router)
    app.include_router(task_router)
    app.include_router(create_graphql_router(), prefix=settings.graphql_path)
    app.include_router(socket_router)
    logger.info(f"✅ Routes registered (GraphQL at {settings.graphql_path})")

    return app


# Run with: uvicorn weekplanner.cmd.api.main:create_app --factory --port 4000
def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("========== Starting Uvicorn Server ==========")
    logger.info(f"Host: {settings.api_host}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Reload: {settings.api_reload}")

    uvicorn.run(
        "weekplanner.cmd.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level="info" if settings.debug else "warning",
    )


if __name__ == "__main__":
    run()
