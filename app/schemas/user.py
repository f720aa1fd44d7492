"""Team member Pydantic schemas — add-member form and API output."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr

from app.models.user import MemberStatusEnum, RoleEnum


class MemberCreate(BaseModel):
    """Fields submitted on the add-member form."""
    name: str
    email: EmailStr


class MemberOut(BaseModel):
    """Team member representation returned by the API."""
    id: int
    user_id: str
    email: str
    name: str
    role: RoleEnum
    status: MemberStatusEnum
    joined_at: Optional[datetime] = None
    task_completion_streak: int = 0
    missed_weeks: int = 0

    model_config = {"from_attributes": True}


class SessionOut(BaseModel):
    authenticated: bool
    user: Optional[MemberOut] = None
