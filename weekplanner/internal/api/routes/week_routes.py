"""
Week REST Routes.
PUT is a full replacement, matching the GraphQL `updateWeek` mutation.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from weekplanner.core.logger import logger
from weekplanner.internal.api.dependencies import get_planner_service
from weekplanner.internal.api.schemas import StandardResponse
from weekplanner.repositories.models import WeekCreate, WeekModel
from weekplanner.services import PlannerService

router = APIRouter(prefix="/weeks", tags=["Weeks"])

_ERRORS = {
    404: {"model": StandardResponse, "description": "Week not found"},
    422: {"model": StandardResponse, "description": "Missing or malformed field"},
    503: {"model": StandardResponse, "description": "Store unavailable"},
}


@router.get(
    "",
    response_model=List[WeekModel],
    summary="List Weeks",
    description="Return every week in store order",
)
async def list_weeks(planner: PlannerService = Depends(get_planner_service)):
    logger.info("API: List weeks")
    return await planner.list_weeks()


@router.get(
    "/{week_id}",
    response_model=WeekModel,
    summary="Get Week",
    responses=_ERRORS,
)
async def get_week(week_id: str, planner: PlannerService = Depends(get_planner_service)):
    logger.info(f"API: Get week id={week_id}")
    return await planner.get_week(week_id)


@router.post(
    "",
    response_model=WeekModel,
    status_code=status.HTTP_201_CREATED,
    summary="Create Week",
    description="Create a week. All fields are required.",
    responses=_ERRORS,
)
async def create_week(
    week: WeekCreate, planner: PlannerService = Depends(get_planner_service)
):
    logger.info(f"API: Create week year={week.year}, numweek={week.numweek}")
    return await planner.create_week(week.model_dump())


@router.put(
    "/{week_id}",
    response_model=WeekModel,
    summary="Replace Week",
    description="Full replace: every field is required and overwrites the stored week.",
    responses=_ERRORS,
)
async def update_week(
    week_id: str,
    week: WeekCreate,
    planner: PlannerService = Depends(get_planner_service),
):
    logger.info(f"API: Replace week id={week_id}")
    return await planner.update_week(week_id, week.model_dump())


@router.delete(
    "/{week_id}",
    response_model=WeekModel,
    summary="Delete Week",
    description="Delete a week and return its state before deletion. Tasks are kept.",
    responses=_ERRORS,
)
async def delete_week(week_id: str, planner: PlannerService = Depends(get_planner_service)):
    logger.info(f"API: Delete week id={week_id}")
    return await planner.delete_week(week_id)
