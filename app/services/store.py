"""
Persistence provider — per-entity collections with list/get/create/update/delete.

``SqlDataStore`` runs every call in its own ``AsyncSession`` against the
configured database. ``MemoryDataStore`` keeps records in dictionaries and is
used by the tests and by the demo fallback.

Filters are expressed as ``Predicate`` values (field, operator, value) rather
than free-form dicts, so a malformed filter fails when it is built instead of
when it reaches the backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import Base
from app.exceptions import DataStoreError, RecordNotFound
from app.models import (
    AiInteraction,
    LeaveRequest,
    Notification,
    PerformanceLog,
    Task,
    TaskSubmission,
    TeamMember,
)

logger = logging.getLogger(__name__)

OPERATORS = {"eq", "in", "not"}

COLLECTIONS: Dict[str, Type[Base]] = {
    "users": TeamMember,
    "tasks": Task,
    "task_submissions": TaskSubmission,
    "leave_requests": LeaveRequest,
    "ai_interactions": AiInteraction,
    "performance_logs": PerformanceLog,
    "notifications": Notification,
}


# ═══════════════════════════════════════════════════════════════
#  Query values
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Predicate:
    """A single ``field <op> value`` condition. All predicates in a list are AND-ed."""

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if not self.field:
            raise ValueError("Predicate field must not be empty")
        if self.op not in OPERATORS:
            raise ValueError(f"Unknown predicate operator: {self.op!r}")
        if self.op == "in":
            if not isinstance(self.value, (list, tuple, set, frozenset)):
                raise ValueError("'in' predicate needs a list, tuple or set of values")
            object.__setattr__(self, "value", tuple(self.value))

    def matches(self, record: Any) -> bool:
        actual = getattr(record, self.field)
        if self.op == "eq":
            return actual == self.value
        if self.op == "in":
            return actual in self.value
        return actual != self.value

    def to_clause(self, column):
        if self.op == "eq":
            return column == self.value
        if self.op == "in":
            return column.in_(list(self.value))
        return column != self.value


def eq(field: str, value: Any) -> Predicate:
    return Predicate(field, "eq", value)


def is_in(field: str, values: Iterable[Any]) -> Predicate:
    return Predicate(field, "in", tuple(values))


def not_(field: str, value: Any) -> Predicate:
    return Predicate(field, "not", value)


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


def asc(field: str) -> OrderBy:
    return OrderBy(field)


def desc(field: str) -> OrderBy:
    return OrderBy(field, descending=True)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _check_fields(model: Type[Base], fields: Iterable[str]) -> None:
    columns = model.__table__.columns.keys()
    for field in fields:
        if field not in columns:
            raise ValueError(f"{model.__name__} has no field {field!r}")


# ═══════════════════════════════════════════════════════════════
#  SQLAlchemy-backed store
# ═══════════════════════════════════════════════════════════════

class SqlCollection:
    """One table, one short-lived session per call."""

    def __init__(self, name: str, model: Type[Base], sessions: async_sessionmaker[AsyncSession]):
        self.name = name
        self.model = model
        self._sessions = sessions

    def _fail(self, action: str, exc: Exception) -> DataStoreError:
        logger.error(f"{self.name}.{action} failed: {exc}")
        return DataStoreError(
            f"Could not {action} {self.name}",
            error_code="STORE_UNAVAILABLE",
            details={"collection": self.name},
        )

    async def list(
        self,
        where: Sequence[Predicate] = (),
        order_by: Sequence[OrderBy] = (),
        limit: Optional[int] = None,
    ) -> List[Any]:
        _check_fields(self.model, [p.field for p in where] + [o.field for o in order_by])
        stmt = select(self.model)
        for predicate in where:
            stmt = stmt.where(predicate.to_clause(getattr(self.model, predicate.field)))
        for order in order_by:
            column = getattr(self.model, order.field)
            stmt = stmt.order_by(column.desc() if order.descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self._sessions() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._fail("list", e) from e

    async def get(self, record_id: int) -> Any:
        try:
            async with self._sessions() as session:
                record = await session.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._fail("get", e) from e
        if record is None:
            raise RecordNotFound(self.name, record_id)
        return record

    async def create(self, fields: Dict[str, Any]) -> Any:
        _check_fields(self.model, fields)
        try:
            async with self._sessions() as session:
                record = self.model(**fields)
                session.add(record)
                await session.commit()
                await session.refresh(record)
                return record
        except SQLAlchemyError as e:
            raise self._fail("create", e) from e

    async def update(self, record_id: int, fields: Dict[str, Any]) -> Any:
        _check_fields(self.model, fields)
        try:
            async with self._sessions() as session:
                record = await session.get(self.model, record_id)
                if record is None:
                    raise RecordNotFound(self.name, record_id)
                for key, value in fields.items():
                    setattr(record, key, value)
                await session.commit()
                await session.refresh(record)
                return record
        except SQLAlchemyError as e:
            raise self._fail("update", e) from e

    async def delete(self, record_id: int) -> None:
        try:
            async with self._sessions() as session:
                record = await session.get(self.model, record_id)
                if record is None:
                    raise RecordNotFound(self.name, record_id)
                await session.delete(record)
                await session.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", e) from e


# ═══════════════════════════════════════════════════════════════
#  In-memory store
# ═══════════════════════════════════════════════════════════════

class MemoryCollection:
    """Dict-backed collection with linear-scan filters.

    Records are handed out as detached copies so callers cannot change
    stored state without going through ``update``.
    """

    def __init__(self, name: str, model: Type[Base], store: "MemoryDataStore"):
        self.name = name
        self.model = model
        self._store = store
        self._records: Dict[int, Any] = {}
        self._next_id = 1

    def _copy(self, record: Any) -> Any:
        columns = self.model.__table__.columns.keys()
        return self.model(**{key: getattr(record, key) for key in columns})

    def _apply_defaults(self, record: Any) -> None:
        for column in self.model.__table__.columns:
            if getattr(record, column.key) is not None:
                continue
            if column.default is not None and column.default.is_scalar:
                setattr(record, column.key, column.default.arg)
            elif column.server_default is not None:
                setattr(record, column.key, _now())

    async def list(
        self,
        where: Sequence[Predicate] = (),
        order_by: Sequence[OrderBy] = (),
        limit: Optional[int] = None,
    ) -> List[Any]:
        self._store.check_available()
        _check_fields(self.model, [p.field for p in where] + [o.field for o in order_by])
        rows = [r for r in self._records.values() if all(p.matches(r) for p in where)]
        # Stable sorts applied last-key-first give multi-key ordering.
        for order in reversed(order_by):
            rows.sort(
                key=lambda r: (getattr(r, order.field) is not None, getattr(r, order.field)),
                reverse=order.descending,
            )
        if limit is not None:
            rows = rows[:limit]
        return [self._copy(r) for r in rows]

    async def get(self, record_id: int) -> Any:
        self._store.check_available()
        if record_id not in self._records:
            raise RecordNotFound(self.name, record_id)
        return self._copy(self._records[record_id])

    async def create(self, fields: Dict[str, Any]) -> Any:
        self._store.check_available()
        _check_fields(self.model, fields)
        record = self.model(**fields)
        record.id = self._next_id
        self._next_id += 1
        self._apply_defaults(record)
        self._records[record.id] = record
        return self._copy(record)

    async def update(self, record_id: int, fields: Dict[str, Any]) -> Any:
        self._store.check_available()
        _check_fields(self.model, fields)
        if record_id not in self._records:
            raise RecordNotFound(self.name, record_id)
        record = self._records[record_id]
        for key, value in fields.items():
            setattr(record, key, value)
        if "updated_at" in self.model.__table__.columns and "updated_at" not in fields:
            record.updated_at = _now()
        return self._copy(record)

    async def delete(self, record_id: int) -> None:
        self._store.check_available()
        if record_id not in self._records:
            raise RecordNotFound(self.name, record_id)
        del self._records[record_id]


# ═══════════════════════════════════════════════════════════════
#  Stores
# ═══════════════════════════════════════════════════════════════

class DataStore:
    """Bundle of one collection per entity kind."""

    users: Any
    tasks: Any
    task_submissions: Any
    leave_requests: Any
    ai_interactions: Any
    performance_logs: Any
    notifications: Any

    def collection(self, name: str):
        if name not in COLLECTIONS:
            raise KeyError(name)
        return getattr(self, name)


class SqlDataStore(DataStore):
    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        for name, model in COLLECTIONS.items():
            setattr(self, name, SqlCollection(name, model, sessions))


class MemoryDataStore(DataStore):
    """In-process fake. Set ``available = False`` to simulate an outage."""

    def __init__(self):
        self.available = True
        for name, model in COLLECTIONS.items():
            setattr(self, name, MemoryCollection(name, model, self))

    def check_available(self) -> None:
        if not self.available:
            raise DataStoreError("In-memory store is offline", error_code="STORE_UNAVAILABLE")
