"""Tests for the DatabaseService CRUD facade."""

from datetime import datetime, timedelta, timezone

import pytest

from app.exceptions import DataStoreError
from app.models.leave_request import LeaveStatusEnum
from app.models.task import TaskStatusEnum
from app.models.user import MemberStatusEnum, RoleEnum


@pytest.mark.asyncio
async def test_create_user_defaults(db):
    user = await db.create_user(user_id="u1", email="u1@example.org")
    assert user.name == "New User"
    assert user.role == RoleEnum.MEMBER
    assert user.status == MemberStatusEnum.ACTIVE
    assert user.joined_at is not None
    assert await db.get_user_by_user_id("u1") is not None
    assert await db.get_user_by_user_id("nobody") is None


@pytest.mark.asyncio
async def test_team_members_exclude_founders_and_removed(db, team):
    members = await db.get_team_members()
    assert [m.name for m in members] == ["Alex Johnson", "Mike Rodriguez", "Sarah Chen"]

    active = await db.get_active_members()
    assert [m.name for m in active] == ["Alex Johnson", "Sarah Chen"]


@pytest.mark.asyncio
async def test_remove_member_is_soft(db, team):
    assert team["gone"].status == MemberStatusEnum.REMOVED
    assert team["gone"].email == "gone@clearvision.org"


@pytest.mark.asyncio
async def test_create_task_stamps_week_and_coerces_values(db):
    task = await db.create_task(
        user_id="member_1",
        title="Write a grant",
        type="custom",
        category="grant_application",
        assigned_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    assert task.status == TaskStatusEnum.PENDING
    assert task.type.value == "custom"
    assert task.category.value == "grant_application"
    assert task.week_number is not None and task.year is not None


@pytest.mark.asyncio
async def test_task_queries(db):
    base = datetime(2024, 3, 11, tzinfo=timezone.utc)
    await db.create_task(user_id="m", title="later", due_date=base + timedelta(days=5))
    await db.create_task(user_id="m", title="sooner", status="in_progress", due_date=base + timedelta(days=1))
    for day in (1, 3, 2):
        await db.create_task(
            user_id="m", title=f"done {day}", status="completed", completed_at=base + timedelta(days=day)
        )

    pending = await db.get_tasks_for_user("m", [TaskStatusEnum.PENDING])
    assert [t.title for t in pending] == ["later"]

    open_tasks = await db.get_tasks_for_user("m", [TaskStatusEnum.PENDING, TaskStatusEnum.IN_PROGRESS])
    assert [t.title for t in open_tasks] == ["sooner", "later"]

    assert len(await db.get_tasks_for_user("m")) == 5

    completed = await db.get_completed_tasks_for_user("m", limit=2)
    assert [t.title for t in completed] == ["done 3", "done 2"]


@pytest.mark.asyncio
async def test_weekly_tasks(db):
    await db.create_task(user_id="a", title="this week", week_number=11, year=2024)
    await db.create_task(user_id="b", title="last week", week_number=10, year=2024)
    await db.create_task(user_id="c", title="other year", week_number=11, year=2023)
    weekly = await db.get_weekly_tasks(11, 2024)
    assert [t.title for t in weekly] == ["this week"]


@pytest.mark.asyncio
async def test_leave_decision_sets_processed_at(db):
    leave = await db.create_leave_request(user_id="member_1", reason="exam", description="Finals")
    assert leave.status == LeaveStatusEnum.PENDING
    assert leave.processed_at is None

    decided = await db.update_leave_request(leave.id, {"status": "approved", "approved_by": "founder_1"})
    assert decided.status == LeaveStatusEnum.APPROVED
    assert decided.processed_at is not None

    assert await db.get_leave_requests(status=LeaveStatusEnum.PENDING) == []


@pytest.mark.asyncio
async def test_ai_interaction_context_round_trip(db):
    interaction = await db.create_ai_interaction(
        user_id="founder_1", interaction_type="ask_bar", prompt="hi", response="hello",
        context={"teamMembersCount": 3},
    )
    assert interaction.context_data == {"teamMembersCount": 3}
    assert len(await db.get_ai_interactions("founder_1")) == 1


@pytest.mark.asyncio
async def test_notifications(db):
    first = await db.create_notification(user_id="member_1", message="New task", type="task_assigned")
    await db.create_notification(user_id="member_1", message="Reminder", priority="high")
    await db.mark_notification_as_read(first.id)

    unread = await db.get_notifications("member_1", unread_only=True)
    assert [n.message for n in unread] == ["Reminder"]
    assert len(await db.get_notifications("member_1")) == 2


@pytest.mark.asyncio
async def test_performance_logs_newest_first(db):
    await db.create_performance_log("member_1", week_number=10, year=2024, tasks_completed=2)
    await db.create_performance_log("member_1", week_number=52, year=2023)
    await db.create_performance_log("member_1", week_number=11, year=2024)
    logs = await db.get_performance_logs("member_1")
    assert [(l.year, l.week_number) for l in logs] == [(2024, 11), (2024, 10), (2023, 52)]


@pytest.mark.asyncio
async def test_team_statistics(db, team):
    for index in range(40):
        status = "completed" if index == 0 else "pending"
        await db.create_task(user_id="member_1", title=f"t{index}", status=status)
    await db.create_leave_request(user_id="member_2")

    stats = await db.get_team_statistics()
    assert stats == {
        "active_members": 2,
        "flagged_members": 1,
        "total_tasks": 40,
        "completed_tasks": 1,
        # 2.5% rounds half-up
        "completion_rate": 3,
        "pending_leave_requests": 1,
    }


@pytest.mark.asyncio
async def test_statistics_with_no_tasks(db):
    stats = await db.get_team_statistics()
    assert stats["completion_rate"] == 0


@pytest.mark.asyncio
async def test_liveness_probe(db, store):
    assert await db.is_database_available() is True
    assert await db.is_database_available() is True

    store.available = False
    assert await db.is_database_available() is False
    assert await db.is_database_available() is False


@pytest.mark.asyncio
async def test_store_errors_propagate(db, store):
    store.available = False
    with pytest.raises(DataStoreError):
        await db.get_team_members()
