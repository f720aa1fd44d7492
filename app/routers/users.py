"""Members router – team roster, add member, soft removal."""

import logging
import time

from fastapi import APIRouter, Depends

from app.dependencies import get_database_service
from app.exceptions import DataStoreError, ValidationError
from app.models.user import TeamMember
from app.routers.auth import require_founder, require_user
from app.schemas.user import MemberCreate, MemberOut
from app.services.database_service import DatabaseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/members", tags=["members"])


@router.get("")
async def list_members(
    current_user: TeamMember = Depends(require_founder),
    db: DatabaseService = Depends(get_database_service),
):
    """Every member not removed, by name. Falls back to an empty roster when the store is down."""
    try:
        members = await db.get_team_members()
    except DataStoreError:
        return {"members": [], "degraded": True}
    return {
        "members": [MemberOut.model_validate(m) for m in members],
        "degraded": False,
    }


@router.get("/me", response_model=MemberOut)
async def read_me(current_user: TeamMember = Depends(require_user)):
    """Return the authenticated member's profile."""
    return current_user


@router.post("", response_model=MemberOut, status_code=201)
async def add_member(
    payload: MemberCreate,
    current_user: TeamMember = Depends(require_founder),
    db: DatabaseService = Depends(get_database_service),
):
    """Add an active member ahead of their first login."""
    name = payload.name.strip()
    if not name:
        raise ValidationError("Please enter the member's name", error_code="NAME_REQUIRED")

    member = await db.create_user(
        user_id=f"member_{int(time.time() * 1000)}",
        name=name,
        email=str(payload.email).strip().lower(),
    )
    logger.info(f"{current_user.name} added {member.name} to the team")
    return member


@router.delete("/{member_id}")
async def remove_member(
    member_id: int,
    current_user: TeamMember = Depends(require_founder),
    db: DatabaseService = Depends(get_database_service),
):
    """Soft-remove a member; the record is kept with ``status = removed``."""
    member = await db.get_member(member_id)
    await db.remove_member(member_id)
    return {"ok": True, "message": f"{member.name} has been removed from the team."}
