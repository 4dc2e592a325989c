"""
Command layer shared by the REST and GraphQL surfaces.

Both surfaces hand raw field mappings to this service; it validates them with
the same Pydantic models, calls the repositories, and publishes a change event
after every successful mutation. Neither surface talks to a repository directly.
"""

from typing import Any, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from weekplanner.core.errors import ValidationError
from weekplanner.core.logger import logger
from weekplanner.repositories.models import (
    TaskBulkUpdate,
    TaskCreate,
    TaskModel,
    TaskUpdate,
    WeekCreate,
    WeekModel,
)
from weekplanner.repositories.task_repository import TaskRepository
from weekplanner.repositories.week_repository import WeekRepository
from weekplanner.services.notifier import ConnectionNotifier

M = TypeVar("M", bound=BaseModel)


def format_validation_error(error: PydanticValidationError) -> str:
    """Flatten Pydantic errors into `field: message; field: message`."""
    parts = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"])
        parts.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(parts)


def validate(model: Type[M], data: Mapping[str, Any]) -> M:
    """Validate a raw mapping, raising the planner's ValidationError."""
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as e:
        message = format_validation_error(e)
        logger.warning(f"⚠️ Invalid {model.__name__} payload: {message}")
        raise ValidationError(f"Validation error: {message}", cause=e) from e


class PlannerService:
    """Weeks and tasks operations, as seen by every API surface."""

    def __init__(
        self,
        weeks: WeekRepository,
        tasks: TaskRepository,
        notifier: Optional[ConnectionNotifier] = None,
    ):
        self.weeks = weeks
        self.tasks = tasks
        self.notifier = notifier
        logger.debug("PlannerService initialized")

    async def _publish(self, event: str, entity: BaseModel) -> None:
        if self.notifier is not None:
            await self.notifier.publish(event, entity.model_dump())

    # Weeks

    async def list_weeks(self) -> List[WeekModel]:
        return await self.weeks.list_weeks()

    async def get_week(self, week_id: str) -> WeekModel:
        return await self.weeks.get_week(week_id)

    async def create_week(self, data: Mapping[str, Any]) -> WeekModel:
        week = await self.weeks.create_week(validate(WeekCreate, data))
        await self._publish("week.created", week)
        return week

    async def update_week(self, week_id: str, data: Mapping[str, Any]) -> WeekModel:
        """Full replace: `data` must carry every Week field."""
        week = await self.weeks.update_week(week_id, validate(WeekCreate, data))
        await self._publish("week.updated", week)
        return week

    async def delete_week(self, week_id: str) -> WeekModel:
        week = await self.weeks.delete_week(week_id)
        await self._publish("week.deleted", week)
        return week

    # Tasks

    async def list_tasks(self) -> List[TaskModel]:
        return await self.tasks.list_tasks()

    async def get_task(self, task_id: str) -> TaskModel:
        return await self.tasks.get_task(task_id)

    async def create_task(self, data: Mapping[str, Any]) -> TaskModel:
        task = await self.tasks.create_task(validate(TaskCreate, data))
        await self._publish("task.created", task)
        return task

    async def update_task(self, task_id: str, data: Mapping[str, Any]) -> TaskModel:
        """Partial merge: only the keys present in `data` change."""
        changes = validate(TaskUpdate, data).changes()
        task = await self.tasks.update_task(task_id, changes)
        await self._publish("task.updated", task)
        return task

    async def update_tasks(self, data: Mapping[str, Any]) -> TaskModel:
        """
        Bulk-route update. The payload must name exactly one task through
        `id` (or `_id`); the other keys are merged like `update_task`.
        """
        payload = validate(TaskBulkUpdate, data)
        task = await self.tasks.update_task(payload.id, payload.changes())
        await self._publish("task.updated", task)
        return task

    async def delete_task(self, task_id: str) -> TaskModel:
        task = await self.tasks.delete_task(task_id)
        await self._publish("task.deleted", task)
        return task
