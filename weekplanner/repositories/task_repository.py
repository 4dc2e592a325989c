"""
Task repository for MongoDB operations.
Updates are partial merges: only the supplied keys are $set.
"""

from typing import Any, Dict, List

from weekplanner.core.database import TASKS_COLLECTION, MongoStore
from weekplanner.core.logger import logger
from weekplanner.repositories.base_repository import BaseRepository
from weekplanner.repositories.models import TaskCreate, TaskModel


class TaskRepository(BaseRepository):
    """Repository for Task documents."""

    entity_name = "Task"
    model = TaskModel

    def __init__(self, store: MongoStore):
        super().__init__(store, TASKS_COLLECTION)

    async def list_tasks(self) -> List[TaskModel]:
        """Return all tasks, in store order."""
        documents = await self.find_all()
        tasks = [self._to_model(document) for document in documents]
        logger.info(f"✅ Listed {len(tasks)} tasks")
        return tasks

    async def get_task(self, task_id: str) -> TaskModel:
        """Return one task or raise NotFoundError."""
        return self._to_model(await self.find_by_id(task_id))

    async def create_task(self, task: TaskCreate) -> TaskModel:
        """Insert a new task and return it with its assigned id."""
        logger.info(f"📝 Creating task: name={task.name!r}, yearweek={task.yearweek}")
        document = await self.insert(task.model_dump())
        created = self._to_model(document)
        logger.info(f"✅ Task created: id={created.id}")
        return created

    async def update_task(self, task_id: str, changes: Dict[str, Any]) -> TaskModel:
        """
        Merge `changes` into an existing task.

        Args:
            task_id: Task identifier
            changes: Already validated field values; absent keys keep their value

        Returns:
            The task after the update
        """
        logger.info(f"📝 Updating task: id={task_id}, fields={sorted(changes)}")
        updated = self._to_model(await self.update_by_id(task_id, changes))
        logger.info(f"✅ Task updated: id={task_id}")
        return updated

    async def delete_task(self, task_id: str) -> TaskModel:
        """Delete a task and return its prior state."""
        logger.warning(f"🗑️ Deleting task: id={task_id}")
        deleted = self._to_model(await self.delete_by_id(task_id))
        logger.info(f"✅ Task deleted: id={task_id}")
        return deleted
