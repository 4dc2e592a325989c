"""
Task REST Routes.
PUT merges partially, matching the GraphQL `updateTask` mutation.
"""

from typing import List, Optional
import time

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    UploadFile,
    status,
)
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from weekplanner.core.config import Settings
from weekplanner.core.logger import logger
from weekplanner.internal.api.dependencies import (
    get_app_settings,
    get_attachment_binder,
    get_file_storage,
    get_planner_service,
)
from weekplanner.internal.api.schemas import AttachRequest, StandardResponse
from weekplanner.repositories.models import (
    TaskBulkUpdate,
    TaskCreate,
    TaskModel,
    TaskUpdate,
)
from weekplanner.services import AttachmentBinder, LocalFileStorage, PlannerService

router = APIRouter(prefix="/tasks", tags=["Tasks"])

_ERRORS = {
    404: {"model": StandardResponse, "description": "Task not found"},
    422: {"model": StandardResponse, "description": "Missing or malformed field"},
    503: {"model": StandardResponse, "description": "Store unavailable"},
}


@router.get(
    "",
    response_model=List[TaskModel],
    summary="List Tasks",
    description="Return every task in store order",
)
async def list_tasks(planner: PlannerService = Depends(get_planner_service)):
    logger.info("API: List tasks")
    return await planner.list_tasks()


@router.post(
    "",
    response_model=TaskModel,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a task. Every field except `file` is required.",
    responses=_ERRORS,
)
async def create_task(
    task: TaskCreate, planner: PlannerService = Depends(get_planner_service)
):
    logger.info(f"API: Create task name={task.name!r}, yearweek={task.yearweek}")
    return await planner.create_task(task.model_dump())


@router.put(
    "",
    response_model=TaskModel,
    summary="Update Task (id in body)",
    description=(
        "Partial update of the single task named by `id` (or `_id`) in the body. "
        "Never updates more than one task."
    ),
    responses=_ERRORS,
)
async def update_tasks(
    payload: TaskBulkUpdate, planner: PlannerService = Depends(get_planner_service)
):
    logger.info(f"API: Update task from body id={payload.id}")
    return await planner.update_tasks(payload.model_dump(exclude_unset=True))


@router.post(
    "/upload",
    response_class=PlainTextResponse,
    summary="Upload Attachment",
    description=(
        "Store a file under its original name in the upload directory. "
        "No task is modified; bind it with `PUT /tasks/{task_id}/file`."
    ),
    responses={
        200: {
            "description": "File stored",
            "content": {"text/plain": {"example": 'File "plan.pdf" uploaded and saved to the "files" folder.'}},
        },
        413: {"model": StandardResponse, "description": "File too large"},
        422: {"model": StandardResponse, "description": "No file or no filename"},
        503: {"model": StandardResponse, "description": "File could not be written"},
    },
)
async def upload_file(
    file: UploadFile = File(..., description="File to store"),
    task_id: Optional[str] = Form(default=None, description="Task the file is meant for"),
    settings: Settings = Depends(get_app_settings),
    storage: LocalFileStorage = Depends(get_file_storage),
    binder: AttachmentBinder = Depends(get_attachment_binder),
):
    start_time = time.time()
    logger.info(f"API: Upload request received: filename={file.filename}")

    content = await file.read()
    file_size_mb = len(content) / (1024 * 1024)
    logger.debug(f"File size: {file_size_mb:.2f}MB")

    if file_size_mb > settings.max_upload_size_mb:
        logger.error(f"❌ File too large: {file_size_mb:.2f}MB")
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=(
                f"File too large: {file_size_mb:.2f}MB. "
                f"Maximum size is {settings.max_upload_size_mb}MB"
            ),
        )

    stored_name = await run_in_threadpool(storage.save, file.filename, content)
    receipt = binder.bind_file(stored_name, task_id)

    elapsed_time = time.time() - start_time
    logger.info(f"API: Upload stored: filename={receipt.filename}, time={elapsed_time:.2f}s")
    return f'File "{receipt.filename}" uploaded and saved to the "{settings.upload_dir}" folder.'


@router.get(
    "/{task_id}",
    response_model=TaskModel,
    summary="Get Task",
    responses=_ERRORS,
)
async def get_task(task_id: str, planner: PlannerService = Depends(get_planner_service)):
    logger.info(f"API: Get task id={task_id}")
    return await planner.get_task(task_id)


@router.put(
    "/{task_id}",
    response_model=TaskModel,
    summary="Update Task",
    description="Partial merge: only the fields present in the body change.",
    responses=_ERRORS,
)
async def update_task(
    task_id: str,
    changes: TaskUpdate,
    planner: PlannerService = Depends(get_planner_service),
):
    logger.info(f"API: Update task id={task_id}")
    return await planner.update_task(task_id, changes.model_dump(exclude_unset=True))


@router.put(
    "/{task_id}/file",
    response_model=TaskModel,
    summary="Attach Uploaded File",
    description="Set the task's `file` to a previously uploaded file.",
    responses=_ERRORS,
)
async def attach_file(
    task_id: str,
    body: AttachRequest,
    binder: AttachmentBinder = Depends(get_attachment_binder),
):
    logger.info(f"API: Attach file={body.filename} to task id={task_id}")
    return await binder.attach(task_id, body.filename)


@router.delete(
    "/{task_id}",
    response_model=TaskModel,
    summary="Delete Task",
    description="Delete a task and return its state before deletion.",
    responses=_ERRORS,
)
async def delete_task(task_id: str, planner: PlannerService = Depends(get_planner_service)):
    logger.info(f"API: Delete task id={task_id}")
    return await planner.delete_task(task_id)
