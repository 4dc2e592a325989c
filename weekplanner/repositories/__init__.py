"""
Repository layer for data access.
Implements Repository Pattern and follows Single Responsibility Principle.
"""

from .base_repository import BaseRepository
from .task_repository import TaskRepository
from .week_repository import WeekRepository

__all__ = [
    "BaseRepository",
    "TaskRepository",
    "WeekRepository",
]
