import os

# Keep test runs from writing log files into the working tree
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from weekplanner.cmd.api.main import create_app
from weekplanner.core.config import Settings
from weekplanner.core.database import MongoStore
from weekplanner.repositories import TaskRepository, WeekRepository
from weekplanner.services import PlannerService

WEEK = {
    "year": 2024,
    "numweek": 10,
    "color": "#ffcc00",
    "description": "Sprint review",
    "priority": 1,
    "link": "https://example.com/w10",
}

TASK = {
    "yearweek": "2024-W10",
    "dayofweek": "Mon",
    "name": "A",
    "description": "",
    "color": "#fff",
    "time_start": "09:00",
    "time_end": "10:00",
    "finished": 0,
    "priority": 1,
}

MISSING_ID = "65f1c0ffee0000000000abcd"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        UPLOAD_DIR=str(tmp_path / "files"),
        MONGODB_DATABASE="weekplanner_test",
        GRAPHQL_PATH="/graphql",
        LOG_TO_FILE=False,
    )


@pytest.fixture
def store(settings):
    return MongoStore.from_client(AsyncMongoMockClient(), settings)


@pytest.fixture
def week_repository(store):
    return WeekRepository(store)


@pytest.fixture
def task_repository(store):
    return TaskRepository(store)


@pytest.fixture
def planner(week_repository, task_repository):
    return PlannerService(week_repository, task_repository)


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    return TestClient(app)
