"""Leave request Pydantic schemas."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, field_validator

from app.models.leave_request import LeaveReasonEnum, LeaveStatusEnum


class LeaveCreate(BaseModel):
    reason: LeaveReasonEnum = LeaveReasonEnum.OTHER
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Dates sent without an offset are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class LeaveDecision(BaseModel):
    status: LeaveStatusEnum
    approval_notes: Optional[str] = None


class LeaveOut(BaseModel):
    id: int
    user_id: str
    reason: LeaveReasonEnum
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: LeaveStatusEnum
    approved_by: Optional[str] = None
    approval_notes: Optional[str] = None
    requested_at: datetime
    processed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
