"""
Task lifecycle — bulk assignment, completion submissions, and task queries.

States run ``pending -> in_progress -> completed``. ``overdue`` is a valid
status value but nothing here moves a task into it.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from app.config import settings
from app.exceptions import ValidationError
from app.models.task import Task, TaskStatusEnum
from app.models.task_submission import TaskSubmission
from app.models.user import TeamMember
from app.services.database_service import DatabaseService
from app.services.intent import Intent, task_template
from app.services.text_generation import FEEDBACK_MAX_TOKENS, TextGenerator, build_feedback_prompt
from app.utils.weeks import week_stamp

logger = logging.getLogger(__name__)

OPEN_STATUSES = (TaskStatusEnum.PENDING, TaskStatusEnum.IN_PROGRESS)


@dataclass
class Completion:
    submission: TaskSubmission
    task: Task
    feedback: str


class TaskLifecycleManager:
    def __init__(self, db: DatabaseService, generator: TextGenerator):
        self.db = db
        self.generator = generator

    async def bulk_assign(
        self,
        members: Sequence[TeamMember],
        intent: Intent,
        created_by: str,
        now: Optional[datetime] = None,
    ) -> List[Task]:
        """Create one pending task per member, all requests in flight at once.

        The first failed creation is raised; creations that already succeeded
        are kept, so a failure can leave the batch partially applied.
        """
        if not members:
            return []

        now = now or datetime.now(timezone.utc)
        due_date = now + timedelta(days=settings.TASK_DUE_DAYS)
        week_number, year = week_stamp(now)
        template = task_template(intent.category)

        tasks = await asyncio.gather(*[
            self.db.create_task(
                user_id=member.user_id,
                title=template.title,
                description=template.description,
                type=intent.task_type,
                category=intent.category,
                status=TaskStatusEnum.PENDING,
                due_date=due_date,
                assigned_at=now,
                week_number=week_number,
                year=year,
                ai_explanation=template.explanation,
                created_by=created_by,
            )
            for member in members
        ])
        logger.info(f"Assigned {len(tasks)} {intent.category.value} tasks (week {week_number}/{year})")
        return list(tasks)

    async def submit_completion(self, task: Task, submitter_id: str, details: str) -> Completion:
        """Record a submission, mark the task completed, then fetch feedback.

        The submission is written before the status change. If the status
        update fails the submission stays behind.
        """
        if not details or not details.strip():
            raise ValidationError("Submission details are required", error_code="EMPTY_SUBMISSION")

        now = datetime.now(timezone.utc)
        submission = await self.db.create_task_submission(
            task_id=task.id,
            user_id=submitter_id,
            submission_type=getattr(task.category, "value", task.category),
            details=details,
            submitted_at=now,
        )
        updated = await self.db.update_task(
            task.id, {"status": TaskStatusEnum.COMPLETED, "completed_at": now}
        )

        # Feedback is display-only; it is not written back onto the submission.
        feedback = await self.generator.generate(
            build_feedback_prompt(task.title, task.description, details),
            FEEDBACK_MAX_TOKENS,
        )
        return Completion(submission=submission, task=updated, feedback=feedback)

    # ── Queries ──

    async def open_tasks(self, user_id: str) -> List[Task]:
        return await self.db.get_tasks_for_user(user_id, list(OPEN_STATUSES))

    async def completed_tasks(self, user_id: str, limit: Optional[int] = None) -> List[Task]:
        return await self.db.get_completed_tasks_for_user(user_id, limit)

    async def weekly_tasks(self, week_number: int, year: int) -> List[Task]:
        return await self.db.get_weekly_tasks(week_number, year)

    async def submissions(self, task_id: int) -> List[TaskSubmission]:
        return await self.db.get_task_submissions(task_id)
