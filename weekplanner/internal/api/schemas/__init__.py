"""
API Schemas (Request/Response Models).
Entity request models live in weekplanner.repositories.models so both
surfaces validate against the same definitions.
"""

from .common_schemas import AttachRequest, HealthResponse, StandardResponse

__all__ = [
    "AttachRequest",
    "HealthResponse",
    "StandardResponse",
]
