"""CRUD facade over the persistence provider for every ClearVision entity."""

import functools
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from app.exceptions import DataStoreError
from app.models.ai_interaction import InteractionTypeEnum
from app.models.leave_request import LeaveReasonEnum, LeaveStatusEnum
from app.models.notification import NotificationTypeEnum, PriorityEnum
from app.models.task import TaskCategoryEnum, TaskStatusEnum, TaskTypeEnum
from app.models.user import MemberStatusEnum, RoleEnum
from app.services.store import DataStore, asc, desc, eq, is_in, not_
from app.utils.weeks import week_stamp

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _logged(action: str):
    """Log a store failure with context, then let it propagate."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except DataStoreError:
                logger.exception(f"Error {action}")
                raise

        return wrapper

    return decorator


class DatabaseService:
    def __init__(self, store: DataStore):
        self.store = store

    # ═══════════════════════════════════════════════════════════
    #  Members
    # ═══════════════════════════════════════════════════════════

    @_logged("fetching user")
    async def get_user_by_user_id(self, user_id: str):
        users = await self.store.users.list(where=[eq("user_id", user_id)], limit=1)
        return users[0] if users else None

    @_logged("fetching member")
    async def get_member(self, member_id: int):
        return await self.store.users.get(member_id)

    @_logged("creating user")
    async def create_user(
        self,
        user_id: str = "",
        email: str = "",
        name: str = "",
        role: RoleEnum = RoleEnum.MEMBER,
        status: MemberStatusEnum = MemberStatusEnum.ACTIVE,
        joined_at: Optional[datetime] = None,
        task_completion_streak: int = 0,
        missed_weeks: int = 0,
    ):
        return await self.store.users.create({
            "user_id": user_id,
            "email": email,
            "name": name or "New User",
            "role": role,
            "status": status,
            "joined_at": joined_at or _now(),
            "task_completion_streak": task_completion_streak,
            "missed_weeks": missed_weeks,
        })

    @_logged("updating user")
    async def update_user(self, member_id: int, updates: Dict[str, Any]):
        return await self.store.users.update(member_id, {**updates, "updated_at": _now()})

    @_logged("fetching team members")
    async def get_team_members(self) -> List[Any]:
        """Members of every status except ``removed``, ordered by name."""
        return await self.store.users.list(
            where=[eq("role", RoleEnum.MEMBER), not_("status", MemberStatusEnum.REMOVED)],
            order_by=[asc("name")],
        )

    @_logged("fetching active members")
    async def get_active_members(self) -> List[Any]:
        return await self.store.users.list(
            where=[eq("role", RoleEnum.MEMBER), eq("status", MemberStatusEnum.ACTIVE)],
            order_by=[asc("name")],
        )

    @_logged("removing member")
    async def remove_member(self, member_id: int) -> bool:
        """Soft delete: the record stays, with ``status = removed``."""
        await self.store.users.update(
            member_id, {"status": MemberStatusEnum.REMOVED, "updated_at": _now()}
        )
        return True

    # ═══════════════════════════════════════════════════════════
    #  Tasks
    # ═══════════════════════════════════════════════════════════

    @_logged("fetching user tasks")
    async def get_tasks_for_user(
        self, user_id: str, statuses: Optional[Sequence[TaskStatusEnum]] = None
    ) -> List[Any]:
        where = [eq("user_id", user_id)]
        if statuses:
            where.append(eq("status", statuses[0]) if len(statuses) == 1 else is_in("status", statuses))
        return await self.store.tasks.list(where=where, order_by=[asc("due_date")])

    @_logged("fetching completed tasks")
    async def get_completed_tasks_for_user(self, user_id: str, limit: Optional[int] = None) -> List[Any]:
        return await self.store.tasks.list(
            where=[eq("user_id", user_id), eq("status", TaskStatusEnum.COMPLETED)],
            order_by=[desc("completed_at")],
            limit=limit,
        )

    @_logged("fetching weekly tasks")
    async def get_weekly_tasks(self, week_number: int, year: int) -> List[Any]:
        return await self.store.tasks.list(
            where=[eq("week_number", week_number), eq("year", year)],
            order_by=[desc("assigned_at")],
        )

    @_logged("fetching task")
    async def get_task(self, task_id: int):
        return await self.store.tasks.get(task_id)

    @_logged("creating task")
    async def create_task(self, **fields):
        now = _now()
        week_number, year = week_stamp(now)
        record = {
            "type": TaskTypeEnum.WEEKLY,
            "category": TaskCategoryEnum.OTHER,
            "status": TaskStatusEnum.PENDING,
            "due_date": now,
            "assigned_at": now,
            "week_number": week_number,
            "year": year,
            "ai_explanation": "",
            "created_by": "",
        }
        record.update({k: v for k, v in fields.items() if v is not None})
        record["type"] = TaskTypeEnum(record["type"])
        record["category"] = TaskCategoryEnum(record["category"])
        record["status"] = TaskStatusEnum(record["status"])
        return await self.store.tasks.create(record)

    @_logged("updating task")
    async def update_task(self, task_id: int, updates: Dict[str, Any]):
        return await self.store.tasks.update(task_id, {**updates, "updated_at": _now()})

    @_logged("deleting task")
    async def delete_task(self, task_id: int) -> bool:
        await self.store.tasks.delete(task_id)
        return True

    # ═══════════════════════════════════════════════════════════
    #  Task submissions
    # ═══════════════════════════════════════════════════════════

    @_logged("creating task submission")
    async def create_task_submission(
        self,
        task_id: int,
        user_id: str,
        submission_type: str,
        details: str,
        submitted_at: Optional[datetime] = None,
        ai_feedback: Optional[str] = None,
        feedback_score: Optional[float] = None,
    ):
        return await self.store.task_submissions.create({
            "task_id": task_id,
            "user_id": user_id,
            "submission_type": submission_type,
            "details": details,
            "submitted_at": submitted_at or _now(),
            "ai_feedback": ai_feedback,
            "feedback_score": feedback_score,
        })

    @_logged("fetching task submissions")
    async def get_task_submissions(self, task_id: int) -> List[Any]:
        return await self.store.task_submissions.list(
            where=[eq("task_id", task_id)], order_by=[desc("submitted_at")]
        )

    # ═══════════════════════════════════════════════════════════
    #  Leave requests
    # ═══════════════════════════════════════════════════════════

    @_logged("creating leave request")
    async def create_leave_request(
        self,
        user_id: str,
        reason: str = "other",
        description: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ):
        now = _now()
        return await self.store.leave_requests.create({
            "user_id": user_id,
            "reason": LeaveReasonEnum(reason),
            "description": description,
            "start_date": start_date or now,
            "end_date": end_date or now,
            "status": LeaveStatusEnum.PENDING,
            "requested_at": now,
        })

    @_logged("updating leave request")
    async def update_leave_request(self, leave_id: int, updates: Dict[str, Any]):
        now = _now()
        fields = {**updates, "updated_at": now}
        if "status" in fields:
            fields["status"] = LeaveStatusEnum(fields["status"])
            if fields["status"] != LeaveStatusEnum.PENDING:
                fields["processed_at"] = now
        return await self.store.leave_requests.update(leave_id, fields)

    @_logged("fetching leave requests")
    async def get_leave_requests(
        self, user_id: Optional[str] = None, status: Optional[LeaveStatusEnum] = None
    ) -> List[Any]:
        where = []
        if user_id:
            where.append(eq("user_id", user_id))
        if status:
            where.append(eq("status", status))
        return await self.store.leave_requests.list(where=where, order_by=[desc("requested_at")])

    # ═══════════════════════════════════════════════════════════
    #  AI interactions
    # ═══════════════════════════════════════════════════════════

    @_logged("creating AI interaction")
    async def create_ai_interaction(
        self,
        user_id: str,
        interaction_type: str,
        prompt: str,
        response: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        return await self.store.ai_interactions.create({
            "user_id": user_id,
            "interaction_type": InteractionTypeEnum(interaction_type),
            "prompt": prompt,
            "response": response,
            "context": json.dumps(context) if context is not None else None,
            "created_at": _now(),
        })

    @_logged("fetching AI interactions")
    async def get_ai_interactions(self, user_id: str, limit: Optional[int] = None) -> List[Any]:
        return await self.store.ai_interactions.list(
            where=[eq("user_id", user_id)], order_by=[desc("created_at")], limit=limit
        )

    # ═══════════════════════════════════════════════════════════
    #  Performance logs
    # ═══════════════════════════════════════════════════════════

    @_logged("creating performance log")
    async def create_performance_log(self, user_id: str, **fields):
        week_number, year = week_stamp(_now())
        record = {
            "user_id": user_id,
            "week_number": week_number,
            "year": year,
            "tasks_assigned": 0,
            "tasks_completed": 0,
            "tasks_overdue": 0,
            "completion_rate": 0,
        }
        record.update({k: v for k, v in fields.items() if v is not None})
        return await self.store.performance_logs.create(record)

    @_logged("fetching performance logs")
    async def get_performance_logs(self, user_id: str, limit: Optional[int] = None) -> List[Any]:
        return await self.store.performance_logs.list(
            where=[eq("user_id", user_id)],
            order_by=[desc("year"), desc("week_number")],
            limit=limit,
        )

    # ═══════════════════════════════════════════════════════════
    #  Notifications
    # ═══════════════════════════════════════════════════════════

    @_logged("creating notification")
    async def create_notification(
        self,
        user_id: str,
        message: str,
        title: str = "",
        type: str = "system",
        priority: str = "normal",
    ):
        return await self.store.notifications.create({
            "user_id": user_id,
            "type": NotificationTypeEnum(type),
            "title": title,
            "message": message,
            "is_read": False,
            "priority": PriorityEnum(priority),
            "created_at": _now(),
        })

    @_logged("fetching notifications")
    async def get_notifications(self, user_id: str, unread_only: bool = False) -> List[Any]:
        where = [eq("user_id", user_id)]
        if unread_only:
            where.append(eq("is_read", False))
        return await self.store.notifications.list(where=where, order_by=[desc("created_at")])

    @_logged("marking notification as read")
    async def mark_notification_as_read(self, notification_id: int):
        return await self.store.notifications.update(
            notification_id, {"is_read": True, "read_at": _now()}
        )

    # ═══════════════════════════════════════════════════════════
    #  Statistics & health
    # ═══════════════════════════════════════════════════════════

    @_logged("fetching team statistics")
    async def get_team_statistics(self) -> Dict[str, int]:
        active = await self.store.users.list(
            where=[eq("role", RoleEnum.MEMBER), eq("status", MemberStatusEnum.ACTIVE)]
        )
        flagged = await self.store.users.list(
            where=[eq("role", RoleEnum.MEMBER), eq("status", MemberStatusEnum.FLAGGED)]
        )
        all_tasks = await self.store.tasks.list()
        completed = [t for t in all_tasks if t.status == TaskStatusEnum.COMPLETED]
        pending_leave = await self.store.leave_requests.list(
            where=[eq("status", LeaveStatusEnum.PENDING)]
        )

        # Half-up rounding, so 2.5% reports as 3
        completion_rate = int(len(completed) * 100 / len(all_tasks) + 0.5) if all_tasks else 0

        return {
            "active_members": len(active),
            "flagged_members": len(flagged),
            "total_tasks": len(all_tasks),
            "completed_tasks": len(completed),
            "completion_rate": completion_rate,
            "pending_leave_requests": len(pending_leave),
        }

    async def is_database_available(self) -> bool:
        """Liveness probe: one ``list`` with ``limit=1`` against users."""
        try:
            await self.store.users.list(limit=1)
            return True
        except DataStoreError:
            logger.warning("Database liveness probe failed")
            return False
