"""Leave router – members request leave, founders decide."""

from typing import Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_database_service
from app.exceptions import ValidationError
from app.models.leave_request import LeaveStatusEnum
from app.models.user import RoleEnum, TeamMember
from app.routers.auth import require_founder, require_user
from app.schemas.leave import LeaveCreate, LeaveDecision, LeaveOut
from app.services.database_service import DatabaseService

router = APIRouter(prefix="/leave", tags=["leave"])


@router.get("")
async def list_leave_requests(
    status: Optional[LeaveStatusEnum] = None,
    current_user: TeamMember = Depends(require_user),
    db: DatabaseService = Depends(get_database_service),
):
    """Founders see every request; members see their own."""
    user_id = None if current_user.role == RoleEnum.FOUNDER else current_user.user_id
    requests = await db.get_leave_requests(user_id=user_id, status=status)
    return {"leave_requests": [LeaveOut.model_validate(r) for r in requests]}


@router.post("", response_model=LeaveOut, status_code=201)
async def request_leave(
    payload: LeaveCreate,
    current_user: TeamMember = Depends(require_user),
    db: DatabaseService = Depends(get_database_service),
):
    if payload.end_date < payload.start_date:
        raise ValidationError("Leave cannot end before it starts", error_code="INVALID_DATES")
    return await db.create_leave_request(
        user_id=current_user.user_id,
        reason=payload.reason,
        description=payload.description,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )


@router.post("/{leave_id}/decision", response_model=LeaveOut)
async def decide_leave(
    leave_id: int,
    payload: LeaveDecision,
    current_user: TeamMember = Depends(require_founder),
    db: DatabaseService = Depends(get_database_service),
):
    return await db.update_leave_request(leave_id, {
        "status": payload.status,
        "approved_by": current_user.user_id,
        "approval_notes": payload.approval_notes,
    })
