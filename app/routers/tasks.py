"""Tasks router – member task lists, completion submissions, founder weekly view."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.dependencies import get_database_service, get_task_lifecycle
from app.exceptions import DataStoreError, ValidationError
from app.models.task import TaskStatusEnum
from app.models.user import RoleEnum, TeamMember
from app.routers.auth import require_founder, require_user
from app.schemas.task import CompletionOut, SubmissionCreate, SubmissionOut, TaskListOut, TaskOut
from app.services.database_service import DatabaseService
from app.services.task_lifecycle import TaskLifecycleManager
from app.utils.weeks import week_stamp

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _task_list(tasks) -> TaskListOut:
    return TaskListOut(tasks=[TaskOut.model_validate(t) for t in tasks])


@router.get("/mine", response_model=TaskListOut)
async def my_tasks(
    current_user: TeamMember = Depends(require_user),
    lifecycle: TaskLifecycleManager = Depends(get_task_lifecycle),
):
    """Pending and in-progress tasks for the caller, soonest due first."""
    try:
        tasks = await lifecycle.open_tasks(current_user.user_id)
    except DataStoreError:
        return TaskListOut(tasks=[], degraded=True)
    return _task_list(tasks)


@router.get("/completed", response_model=TaskListOut)
async def completed_tasks(
    limit: Optional[int] = Query(10, ge=1),
    current_user: TeamMember = Depends(require_user),
    lifecycle: TaskLifecycleManager = Depends(get_task_lifecycle),
):
    """Most recently completed tasks for the caller."""
    try:
        tasks = await lifecycle.completed_tasks(current_user.user_id, limit)
    except DataStoreError:
        return TaskListOut(tasks=[], degraded=True)
    return _task_list(tasks)


@router.get("/weekly", response_model=TaskListOut)
async def weekly_tasks(
    week: Optional[int] = Query(None, ge=1, le=53),
    year: Optional[int] = None,
    current_user: TeamMember = Depends(require_founder),
    lifecycle: TaskLifecycleManager = Depends(get_task_lifecycle),
):
    """Every task stamped with the given ISO week (default: this week)."""
    current_week, current_year = week_stamp(datetime.now(timezone.utc))
    try:
        tasks = await lifecycle.weekly_tasks(week or current_week, year or current_year)
    except DataStoreError:
        return TaskListOut(tasks=[], degraded=True)
    return _task_list(tasks)


@router.post("/{task_id}/submit", response_model=CompletionOut)
async def submit_task(
    task_id: int,
    payload: SubmissionCreate,
    current_user: TeamMember = Depends(require_user),
    db: DatabaseService = Depends(get_database_service),
    lifecycle: TaskLifecycleManager = Depends(get_task_lifecycle),
):
    """Submit a completion report; returns the completed task and generated feedback."""
    if not payload.details.strip():
        raise ValidationError("Please describe what you completed", error_code="EMPTY_SUBMISSION")

    task = await db.get_task(task_id)
    if task.user_id != current_user.user_id:
        raise HTTPException(status_code=403, detail="This task is assigned to someone else.")
    if task.status == TaskStatusEnum.COMPLETED:
        raise ValidationError("This task has already been completed", error_code="ALREADY_COMPLETED")

    completion = await lifecycle.submit_completion(task, current_user.user_id, payload.details)
    return CompletionOut(
        task=TaskOut.model_validate(completion.task),
        submission=SubmissionOut.model_validate(completion.submission),
        feedback=completion.feedback,
    )


@router.get("/{task_id}/submissions")
async def task_submissions(
    task_id: int,
    current_user: TeamMember = Depends(require_user),
    db: DatabaseService = Depends(get_database_service),
    lifecycle: TaskLifecycleManager = Depends(get_task_lifecycle),
):
    task = await db.get_task(task_id)
    if current_user.role != RoleEnum.FOUNDER and task.user_id != current_user.user_id:
        raise HTTPException(status_code=403, detail="This task is assigned to someone else.")
    submissions = await lifecycle.submissions(task_id)
    return {"submissions": [SubmissionOut.model_validate(s) for s in submissions]}


@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    current_user: TeamMember = Depends(require_founder),
    db: DatabaseService = Depends(get_database_service),
):
    await db.delete_task(task_id)
    return {"ok": True}
