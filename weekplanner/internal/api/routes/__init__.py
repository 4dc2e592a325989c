"""
API Routes.
"""

from .health_routes import router as health_router
from .socket_routes import router as socket_router
from .task_routes import router as task_router
from .week_routes import router as week_router

__all__ = [
    "health_router",
    "socket_router",
    "task_router",
    "week_router",
]
