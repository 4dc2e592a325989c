"""
Error kinds shared by the repositories, the command layer and both API surfaces.
"""

from typing import Optional


class PlannerError(Exception):
    """Base error. Carries a machine-readable code and the REST status it maps to."""

    code = "PLANNER_ERROR"
    status_code = 500

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(PlannerError):
    """A required field is missing or cannot be coerced to its declared type."""

    code = "VALIDATION_ERROR"
    status_code = 422


class NotFoundError(PlannerError):
    """An identifier does not resolve to an existing record."""

    code = "NOT_FOUND"
    status_code = 404


class StoreError(PlannerError):
    """The underlying store failed (connection loss, write failure, bad document)."""

    code = "STORE_ERROR"
    status_code = 503
