"""Dashboard router — store liveness and team statistics."""

from fastapi import APIRouter, Depends

from app.dependencies import get_database_service
from app.models.user import TeamMember
from app.routers.auth import require_founder
from app.services.database_service import DatabaseService

router = APIRouter(tags=["dashboard"])


@router.get("/status")
async def database_status(db: DatabaseService = Depends(get_database_service)):
    """Liveness probe used to switch the UI into degraded mode."""
    return {"database_available": await db.is_database_available()}


@router.get("/stats")
async def team_statistics(
    current_user: TeamMember = Depends(require_founder),
    db: DatabaseService = Depends(get_database_service),
):
    return await db.get_team_statistics()
