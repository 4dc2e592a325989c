"""
GraphQL schema (Strawberry).

Resolvers pass their arguments to PlannerService as plain mappings, so GraphQL
input goes through the same Pydantic validation as the REST bodies. Field and
argument names keep their snake_case spelling (`time_start`, `time_end`).

Every root field is nullable: a failing field resolves to null with its own
entry in `errors`, and the remaining fields (and later mutations) still run.
"""

from typing import Any, Awaitable, List, Optional, TypeVar

import strawberry
from fastapi import Depends
from graphql import GraphQLError
from strawberry.fastapi import GraphQLRouter
from strawberry.schema.config import StrawberryConfig
from strawberry.types import Info

from weekplanner.core.errors import PlannerError
from weekplanner.core.logger import logger
from weekplanner.internal.api.dependencies import get_planner_service
from weekplanner.repositories.models import TaskModel, WeekModel
from weekplanner.services import PlannerService

T = TypeVar("T")


@strawberry.type
class Week:
    id: strawberry.ID
    year: int
    numweek: int
    color: str
    description: str
    priority: int
    link: str

    @classmethod
    def from_model(cls, model: WeekModel) -> "Week":
        return cls(**model.model_dump())


@strawberry.type
class Task:
    id: strawberry.ID
    yearweek: str
    dayofweek: str
    name: str
    description: str
    color: str
    time_start: str
    time_end: str
    finished: int
    priority: int
    file: Optional[str] = None

    @classmethod
    def from_model(cls, model: TaskModel) -> "Task":
        return cls(**model.model_dump())


def _planner(info: Info) -> PlannerService:
    return info.context["planner"]


async def _resolve(operation: str, call: Awaitable[T]) -> T:
    """Await a service call, reporting planner errors as GraphQL errors."""
    try:
        return await call
    except PlannerError as e:
        logger.warning(f"GraphQL: {operation} failed: {e.message}")
        raise GraphQLError(e.message, extensions={"code": e.code}) from e


def _supplied(**fields: Any) -> dict:
    return {name: value for name, value in fields.items() if value is not strawberry.UNSET}


@strawberry.type
class Query:
    @strawberry.field
    async def weeks(self, info: Info) -> Optional[List[Week]]:
        weeks = await _resolve("weeks", _planner(info).list_weeks())
        return [Week.from_model(week) for week in weeks]

    @strawberry.field
    async def tasks(self, info: Info) -> Optional[List[Task]]:
        tasks = await _resolve("tasks", _planner(info).list_tasks())
        return [Task.from_model(task) for task in tasks]

    @strawberry.field
    async def week(self, info: Info, id: strawberry.ID) -> Optional[Week]:
        return Week.from_model(await _resolve("week", _planner(info).get_week(id)))

    @strawberry.field
    async def task(self, info: Info, id: strawberry.ID) -> Optional[Task]:
        return Task.from_model(await _resolve("task", _planner(info).get_task(id)))


@strawberry.type
class Mutation:
    @strawberry.mutation(name="createWeek")
    async def create_week(
        self,
        info: Info,
        year: int,
        numweek: int,
        color: str,
        description: str,
        priority: int,
        link: str,
    ) -> Optional[Week]:
        data = dict(
            year=year,
            numweek=numweek,
            color=color,
            description=description,
            priority=priority,
            link=link,
        )
        return Week.from_model(await _resolve("createWeek", _planner(info).create_week(data)))

    @strawberry.mutation(name="updateWeek")
    async def update_week(
        self,
        info: Info,
        id: strawberry.ID,
        year: int,
        numweek: int,
        color: str,
        description: str,
        priority: int,
        link: str,
    ) -> Optional[Week]:
        data = dict(
            year=year,
            numweek=numweek,
            color=color,
            description=description,
            priority=priority,
            link=link,
        )
        return Week.from_model(
            await _resolve("updateWeek", _planner(info).update_week(id, data))
        )

    @strawberry.mutation(name="deleteWeek")
    async def delete_week(self, info: Info, id: strawberry.ID) -> Optional[Week]:
        return Week.from_model(await _resolve("deleteWeek", _planner(info).delete_week(id)))

    @strawberry.mutation(name="createTask")
    async def create_task(
        self,
        info: Info,
        yearweek: str,
        dayofweek: str,
        name: str,
        description: str,
        color: str,
        time_start: str,
        time_end: str,
        finished: int,
        priority: int,
        file: Optional[str] = None,
    ) -> Optional[Task]:
        data = dict(
            yearweek=yearweek,
            dayofweek=dayofweek,
            name=name,
            description=description,
            color=color,
            time_start=time_start,
            time_end=time_end,
            finished=finished,
            priority=priority,
            file=file,
        )
        return Task.from_model(await _resolve("createTask", _planner(info).create_task(data)))

    @strawberry.mutation(name="updateTask")
    async def update_task(
        self,
        info: Info,
        id: strawberry.ID,
        yearweek: Optional[str] = strawberry.UNSET,
        dayofweek: Optional[str] = strawberry.UNSET,
        name: Optional[str] = strawberry.UNSET,
        description: Optional[str] = strawberry.UNSET,
        color: Optional[str] = strawberry.UNSET,
        time_start: Optional[str] = strawberry.UNSET,
        time_end: Optional[str] = strawberry.UNSET,
        finished: Optional[int] = strawberry.UNSET,
        priority: Optional[int] = strawberry.UNSET,
        file: Optional[str] = strawberry.UNSET,
    ) -> Optional[Task]:
        # Omitted arguments stay UNSET and are left out of the merge
        changes = _supplied(
            yearweek=yearweek,
            dayofweek=dayofweek,
            name=name,
            description=description,
            color=color,
            time_start=time_start,
            time_end=time_end,
            finished=finished,
            priority=priority,
            file=file,
        )
        return Task.from_model(
            await _resolve("updateTask", _planner(info).update_task(id, changes))
        )

    @strawberry.mutation(name="deleteTask")
    async def delete_task(self, info: Info, id: strawberry.ID) -> Optional[Task]:
        return Task.from_model(await _resolve("deleteTask", _planner(info).delete_task(id)))


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    config=StrawberryConfig(auto_camel_case=False),
)


async def get_context(planner: PlannerService = Depends(get_planner_service)) -> dict:
    return {"planner": planner}


def create_graphql_router() -> GraphQLRouter:
    """Router serving the schema; mount it at the configured GraphQL path."""
    return GraphQLRouter(schema, context_getter=get_context)
