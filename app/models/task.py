"""Task model — a unit of work assigned to one member for one week."""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class TaskTypeEnum(str, enum.Enum):
    WEEKLY = "weekly"
    CUSTOM = "custom"
    ONE_TIME = "one_time"


class TaskCategoryEnum(str, enum.Enum):
    GRANT_APPLICATION = "grant_application"
    SPONSOR_OUTREACH = "sponsor_outreach"
    PARTNER_CONTACT = "partner_contact"
    RESEARCH = "research"
    OTHER = "other"


class TaskStatusEnum(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    # External auth id of the assignee, not TeamMember.id
    user_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)

    title: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[TaskTypeEnum] = mapped_column(
        Enum(TaskTypeEnum), default=TaskTypeEnum.WEEKLY
    )
    category: Mapped[TaskCategoryEnum] = mapped_column(
        Enum(TaskCategoryEnum), default=TaskCategoryEnum.OTHER
    )
    status: Mapped[TaskStatusEnum] = mapped_column(
        Enum(TaskStatusEnum), default=TaskStatusEnum.PENDING, index=True
    )

    # ── Schedule ──
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    assigned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    week_number: Mapped[int] = mapped_column(Integer, index=True)
    year: Mapped[int] = mapped_column(Integer, index=True)

    ai_explanation: Mapped[Optional[str]] = mapped_column(Text)
    created_by: Mapped[str] = mapped_column(String(255), default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
