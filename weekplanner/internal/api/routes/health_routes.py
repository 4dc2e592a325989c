"""
Health Check API Routes.
"""

from fastapi import APIRouter, Depends

from weekplanner.core.config import Settings
from weekplanner.core.database import MongoStore
from weekplanner.internal.api.dependencies import get_app_settings, get_store
from weekplanner.internal.api.schemas import HealthResponse, StandardResponse
from weekplanner.internal.api.utils import success_response

router = APIRouter(tags=["Health"])


@router.get(
    "/",
    response_model=StandardResponse,
    summary="Root Endpoint",
    description="Get basic API information",
    operation_id="get_root",
)
async def root(settings: Settings = Depends(get_app_settings)):
    """Service name, version and the GraphQL path."""
    return success_response(
        message="API service is running",
        data={
            "service": settings.app_name,
            "version": settings.app_version,
            "graphql": settings.graphql_path,
            "status": "running",
        },
    )


@router.get(
    "/health",
    response_model=StandardResponse,
    summary="Health Check",
    description="Check service health, including the MongoDB connection",
    operation_id="health_check",
)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    store: MongoStore = Depends(get_store),
):
    db_healthy = await store.health_check()
    health_data = HealthResponse(
        status="healthy" if db_healthy else "degraded",
        service=settings.app_name,
        version=settings.app_version,
        database="connected" if db_healthy else "disconnected",
    )
    message = "Service is healthy" if db_healthy else "Service is degraded"
    return success_response(message=message, data=health_data.model_dump())
