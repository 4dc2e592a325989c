"""
Core module containing configuration, logging, errors and the store handle.
"""

from .config import Settings, get_settings
from .database import MongoStore
from .errors import NotFoundError, PlannerError, StoreError, ValidationError
from .logger import logger

__all__ = [
    "Settings",
    "get_settings",
    "logger",
    "MongoStore",
    "PlannerError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
]
