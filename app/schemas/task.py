"""Task, submission, and ask-bar Pydantic schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from app.models.task import TaskCategoryEnum, TaskStatusEnum, TaskTypeEnum


class TaskOut(BaseModel):
    id: int
    user_id: str
    title: str
    description: str
    type: TaskTypeEnum
    category: TaskCategoryEnum
    status: TaskStatusEnum
    due_date: datetime
    assigned_at: datetime
    completed_at: Optional[datetime] = None
    week_number: int
    year: int
    ai_explanation: Optional[str] = None
    created_by: str

    model_config = {"from_attributes": True}


class TaskListOut(BaseModel):
    tasks: List[TaskOut]
    degraded: bool = False


class SubmissionCreate(BaseModel):
    details: str


class SubmissionOut(BaseModel):
    id: int
    task_id: int
    user_id: str
    submission_type: str
    details: str
    ai_feedback: Optional[str] = None
    feedback_score: Optional[float] = None
    submitted_at: datetime

    model_config = {"from_attributes": True}


class CompletionOut(BaseModel):
    task: TaskOut
    submission: SubmissionOut
    feedback: str


class AskRequest(BaseModel):
    prompt: str


class AskOut(BaseModel):
    response: str
    category: TaskCategoryEnum
    task_type: TaskTypeEnum
    tasks_created: int
    tasks: List[TaskOut]
    messages: List[str]
    degraded: bool = False
    assignment_failed: bool = False
