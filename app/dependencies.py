"""
FastAPI dependencies for the service layer.

The persistence handle and text generator are built once in the app lifespan
and stored on ``app.state``; tests replace them with in-memory fakes.
"""

from fastapi import Depends, Request

from app.services.ask_bar import AskBar
from app.services.database_service import DatabaseService
from app.services.task_lifecycle import TaskLifecycleManager
from app.services.text_generation import TextGenerator


def get_database_service(request: Request) -> DatabaseService:
    return request.app.state.db_service


def get_text_generator(request: Request) -> TextGenerator:
    return request.app.state.text_generator


def get_task_lifecycle(
    db: DatabaseService = Depends(get_database_service),
    generator: TextGenerator = Depends(get_text_generator),
) -> TaskLifecycleManager:
    return TaskLifecycleManager(db, generator)


def get_ask_bar(
    db: DatabaseService = Depends(get_database_service),
    lifecycle: TaskLifecycleManager = Depends(get_task_lifecycle),
    generator: TextGenerator = Depends(get_text_generator),
) -> AskBar:
    return AskBar(db, lifecycle, generator)
