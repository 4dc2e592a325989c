"""
FastAPI dependencies resolving the services built by the application factory.
"""

from fastapi import Request

from weekplanner.core.config import Settings
from weekplanner.core.database import MongoStore
from weekplanner.services import AttachmentBinder, LocalFileStorage, PlannerService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> MongoStore:
    return request.app.state.store


def get_planner_service(request: Request) -> PlannerService:
    return request.app.state.planner


def get_file_storage(request: Request) -> LocalFileStorage:
    return request.app.state.file_storage


def get_attachment_binder(request: Request) -> AttachmentBinder:
    return request.app.state.attachment_binder
