"""
Service layer implementing business logic.
Follows Service Layer Pattern and Single Responsibility Principle.
"""

from .attachment_service import AttachmentBinder, AttachmentReceipt, LocalFileStorage
from .notifier import ConnectionNotifier
from .planner_service import PlannerService

__all__ = [
    "AttachmentBinder",
    "AttachmentReceipt",
    "LocalFileStorage",
    "ConnectionNotifier",
    "PlannerService",
]
