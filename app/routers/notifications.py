"""Notifications router — fetch and mark as read."""

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_database_service
from app.models.user import TeamMember
from app.routers.auth import require_user
from app.services.database_service import DatabaseService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def get_notifications(
    unread_only: bool = False,
    current_user: TeamMember = Depends(require_user),
    db: DatabaseService = Depends(get_database_service),
):
    """Return notifications (newest first) + unread count for the current member."""
    notifs = await db.get_notifications(current_user.user_id, unread_only=unread_only)

    return {
        "unread_count": sum(1 for n in notifs if not n.is_read),
        "notifications": [
            {
                "id": n.id,
                "type": getattr(n.type, "value", n.type),
                "title": n.title,
                "message": n.message,
                "priority": getattr(n.priority, "value", n.priority),
                "is_read": n.is_read,
                "created_at": n.created_at.isoformat() if n.created_at else "",
            }
            for n in notifs
        ],
    }


@router.post("/read/{notif_id}")
async def mark_read(
    notif_id: int,
    current_user: TeamMember = Depends(require_user),
    db: DatabaseService = Depends(get_database_service),
):
    """Mark a single notification as read."""
    owned = await db.get_notifications(current_user.user_id)
    if not any(n.id == notif_id for n in owned):
        raise HTTPException(status_code=404, detail="Notification not found")

    await db.mark_notification_as_read(notif_id)
    return {"ok": True}
