from datetime import datetime, timezone

import pytest

from app.models.task import TaskStatusEnum
from app.models.user import RoleEnum
from app.services.demo_data import DEMO_FOUNDER_ID, seed_demo_data


@pytest.mark.asyncio
async def test_seed_populates_team_and_tasks(db):
    now = datetime(2024, 1, 3, tzinfo=timezone.utc)
    counts = await seed_demo_data(db, now=now)

    assert counts == {"members": 3, "tasks": 6}
    founder = await db.get_user_by_user_id(DEMO_FOUNDER_ID)
    assert founder.role == RoleEnum.FOUNDER
    assert len(await db.get_team_members()) == 3

    assert len(await db.get_weekly_tasks(1, 2024)) == 4
    # completed tasks belong to the previous ISO week, across the year boundary
    previous = await db.get_weekly_tasks(52, 2023)
    assert {t.status for t in previous} == {TaskStatusEnum.COMPLETED}
    assert len(previous) == 2


@pytest.mark.asyncio
async def test_seed_skips_when_users_exist(db):
    await db.create_user(user_id="someone", name="Someone")
    assert await seed_demo_data(db) == {"members": 0, "tasks": 0}
    assert len(await db.store.tasks.list()) == 0
