"""
Common API schemas shared across different endpoints.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class StandardResponse(BaseModel):
    """
    Standard envelope for service endpoints and for every error.

    - error_code: 0 = success, 1 = error
    - message: Success or error message
    - data: Response data (optional)
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"error_code": 0, "message": "Service is healthy", "data": {"status": "healthy"}},
                {"error_code": 1, "message": "Task not found: 65f1c0ffee0000000000abcd", "data": None},
            ]
        }
    )

    error_code: int = 0
    message: str
    data: Optional[Any] = None


class HealthResponse(BaseModel):
    """Response model for health check (internal use)."""

    status: str
    service: str
    version: str
    database: str


class AttachRequest(BaseModel):
    """Body of `PUT /tasks/{task_id}/file`."""

    model_config = ConfigDict(json_schema_extra={"examples": [{"filename": "plan.pdf"}]})

    filename: str = Field(..., min_length=1, description="Name returned by the upload")
