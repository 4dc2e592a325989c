"""
File attachments for tasks.

Uploading and binding are two separate steps: `LocalFileStorage.save` writes
the bytes and `AttachmentBinder.bind_file` acknowledges them without touching
any task; `AttachmentBinder.attach` is the explicit call that sets `Task.file`.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from weekplanner.core.errors import NotFoundError, StoreError, ValidationError
from weekplanner.core.logger import logger
from weekplanner.repositories.models import TaskModel
from weekplanner.services.planner_service import PlannerService


class LocalFileStorage:
    """Stores uploads in one flat directory, keyed by original filename."""

    def __init__(self, root_dir: str):
        self.root_dir = Path(root_dir)

    def path_for(self, filename: Optional[str]) -> Path:
        """
        Resolve the storage path for a filename. Directory components are
        stripped so an upload can never escape the storage directory.
        """
        name = Path(filename or "").name
        if not name or name in (".", ".."):
            raise ValidationError("Validation error: file: a filename is required")
        return self.root_dir / name

    def save(self, filename: Optional[str], data: bytes) -> str:
        """
        Write `data` under the file's base name. An existing file with the
        same name is overwritten.

        Returns:
            The stored filename

        Raises:
            ValidationError: If the filename is empty
            StoreError: If the write fails
        """
        path = self.path_for(filename)
        try:
            self.root_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"❌ Failed to store upload {path}: {e}")
            raise StoreError(f"Failed to store file {path.name}: {e}", cause=e) from e

        logger.info(f"✅ Stored upload: {path} ({len(data)} bytes)")
        return path.name

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()


@dataclass
class AttachmentReceipt:
    """Acknowledgement that an uploaded file was received."""

    filename: str
    task_id: Optional[str] = None


class AttachmentBinder:
    """Links stored uploads to tasks."""

    def __init__(self, storage: LocalFileStorage, planner: PlannerService):
        self.storage = storage
        self.planner = planner

    def bind_file(
        self, stored_filename: str, task_id: Optional[str] = None
    ) -> AttachmentReceipt:
        """
        Acknowledge an upload. This never sets `Task.file`; a task named here
        is only recorded on the receipt.
        """
        logger.info(f"📎 Upload received: filename={stored_filename}, task_id={task_id}")
        return AttachmentReceipt(filename=stored_filename, task_id=task_id)

    async def attach(self, task_id: str, stored_filename: str) -> TaskModel:
        """
        Set `Task.file` to a previously uploaded file.

        Raises:
            NotFoundError: If the file is not in storage or the task does not exist
        """
        if not self.storage.exists(stored_filename):
            logger.warning(f"⚠️ Attachment not in storage: {stored_filename}")
            raise NotFoundError(f"File not found: {stored_filename}")

        task = await self.planner.update_task(task_id, {"file": stored_filename})
        logger.info(f"✅ Attached {stored_filename} to task {task_id}")
        return task
