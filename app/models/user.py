"""Team member model — founders and members of the organisation."""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class RoleEnum(str, enum.Enum):
    FOUNDER = "founder"
    MEMBER = "member"


class MemberStatusEnum(str, enum.Enum):
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    FLAGGED = "flagged"
    REMOVED = "removed"


class TeamMember(Base):
    __tablename__ = "users"

    # ── Identity ──
    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), default="")
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # ── Team standing ──
    role: Mapped[RoleEnum] = mapped_column(Enum(RoleEnum), default=RoleEnum.MEMBER)
    status: Mapped[MemberStatusEnum] = mapped_column(
        Enum(MemberStatusEnum), default=MemberStatusEnum.ACTIVE
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    task_completion_streak: Mapped[int] = mapped_column(Integer, default=0)
    missed_weeks: Mapped[int] = mapped_column(Integer, default=0)

    # ── Timestamps ──
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @property
    def is_founder(self) -> bool:
        return self.role == RoleEnum.FOUNDER
