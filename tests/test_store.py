"""Tests for the persistence providers."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.database import Base
from app.exceptions import DataStoreError, RecordNotFound
from app.models.task import TaskCategoryEnum, TaskStatusEnum
from app.services.store import MemoryDataStore, Predicate, SqlDataStore, asc, desc, eq, is_in, not_


def _task_fields(user_id, status=TaskStatusEnum.PENDING, days=0):
    now = datetime(2024, 3, 11, tzinfo=timezone.utc)
    return {
        "user_id": user_id,
        "title": f"Task for {user_id}",
        "description": "Reach out",
        "category": TaskCategoryEnum.GRANT_APPLICATION,
        "status": status,
        "due_date": now + timedelta(days=days),
        "assigned_at": now,
        "week_number": 11,
        "year": 2024,
        "created_by": "founder_1",
    }


class TestPredicate:

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValueError):
            Predicate("status", "gt", 3)

    def test_empty_field_rejected(self):
        with pytest.raises(ValueError):
            Predicate("", "eq", 3)

    def test_in_needs_a_collection(self):
        with pytest.raises(ValueError):
            Predicate("status", "in", "pending")

    def test_in_accepts_any_iterable_helper(self):
        assert is_in("status", ["a", "b"]).value == ("a", "b")


class TestMemoryDataStore:

    @pytest.mark.asyncio
    async def test_create_assigns_ids_and_defaults(self, store):
        first = await store.notifications.create({"user_id": "u1", "message": "hi"})
        second = await store.notifications.create({"user_id": "u1", "message": "again"})
        assert (first.id, second.id) == (1, 2)
        assert first.is_read is False
        assert first.created_at is not None

    @pytest.mark.asyncio
    async def test_filters_ordering_and_limit(self, store):
        await store.tasks.create(_task_fields("a", days=3))
        await store.tasks.create(_task_fields("a", TaskStatusEnum.IN_PROGRESS, days=1))
        await store.tasks.create(_task_fields("a", TaskStatusEnum.COMPLETED, days=2))
        await store.tasks.create(_task_fields("b", days=0))

        open_for_a = await store.tasks.list(
            where=[eq("user_id", "a"), is_in("status", [TaskStatusEnum.PENDING, TaskStatusEnum.IN_PROGRESS])],
            order_by=[asc("due_date")],
        )
        assert [t.status for t in open_for_a] == [TaskStatusEnum.IN_PROGRESS, TaskStatusEnum.PENDING]

        not_completed = await store.tasks.list(where=[not_("status", TaskStatusEnum.COMPLETED)])
        assert len(not_completed) == 3

        latest = await store.tasks.list(order_by=[desc("due_date")], limit=2)
        assert [t.user_id for t in latest] == ["a", "a"]
        assert latest[0].due_date > latest[1].due_date

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, store):
        with pytest.raises(ValueError):
            await store.tasks.list(where=[eq("colour", "red")])

    @pytest.mark.asyncio
    async def test_missing_record(self, store):
        with pytest.raises(RecordNotFound) as exc_info:
            await store.tasks.get(42)
        assert exc_info.value.error_code == "NOT_FOUND"
        with pytest.raises(RecordNotFound):
            await store.tasks.update(42, {"title": "x"})
        with pytest.raises(RecordNotFound):
            await store.tasks.delete(42)

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, store):
        task = await store.tasks.create(_task_fields("a"))
        task.title = "changed locally"
        assert (await store.tasks.get(task.id)).title == "Task for a"

    @pytest.mark.asyncio
    async def test_update_and_delete(self, store):
        task = await store.tasks.create(_task_fields("a"))
        updated = await store.tasks.update(task.id, {"status": TaskStatusEnum.COMPLETED})
        assert updated.status == TaskStatusEnum.COMPLETED
        assert updated.updated_at is not None

        await store.tasks.delete(task.id)
        assert await store.tasks.list() == []

    @pytest.mark.asyncio
    async def test_offline_store_raises(self, store):
        store.available = False
        with pytest.raises(DataStoreError):
            await store.users.list(limit=1)

    def test_collection_lookup(self, store):
        assert store.collection("tasks") is store.tasks
        with pytest.raises(KeyError):
            store.collection("projects")


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlDataStore(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


class TestSqlDataStore:

    @pytest.mark.asyncio
    async def test_round_trip(self, sql_store):
        task = await sql_store.tasks.create(_task_fields("a"))
        assert task.id is not None

        fetched = await sql_store.tasks.get(task.id)
        assert fetched.category == TaskCategoryEnum.GRANT_APPLICATION

        await sql_store.tasks.update(task.id, {"status": TaskStatusEnum.COMPLETED})
        done = await sql_store.tasks.list(where=[eq("status", TaskStatusEnum.COMPLETED)])
        assert [t.id for t in done] == [task.id]

        await sql_store.tasks.delete(task.id)
        with pytest.raises(RecordNotFound):
            await sql_store.tasks.get(task.id)

    @pytest.mark.asyncio
    async def test_concurrent_creates_use_separate_sessions(self, sql_store):
        created = await asyncio.gather(*[
            sql_store.tasks.create(_task_fields(user_id)) for user_id in ("a", "b", "c")
        ])
        assert len({t.id for t in created}) == 3
        rows = await sql_store.tasks.list(order_by=[asc("user_id")])
        assert [t.user_id for t in rows] == ["a", "b", "c"]
