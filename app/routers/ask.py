"""Ask bar router – founder free-text requests."""

from fastapi import APIRouter, Depends

from app.dependencies import get_ask_bar
from app.models.user import TeamMember
from app.routers.auth import require_founder
from app.schemas.task import AskOut, AskRequest, TaskOut
from app.services.ask_bar import AskBar

router = APIRouter(prefix="/ask", tags=["ask"])


@router.post("", response_model=AskOut)
async def ask(
    payload: AskRequest,
    current_user: TeamMember = Depends(require_founder),
    ask_bar: AskBar = Depends(get_ask_bar),
):
    """Send a request to the assistant; assignment requests create tasks for active members."""
    result = await ask_bar.handle(current_user, payload.prompt)
    return AskOut(
        response=result.response,
        category=result.intent.category,
        task_type=result.intent.task_type,
        tasks_created=len(result.tasks),
        tasks=[TaskOut.model_validate(t) for t in result.tasks],
        messages=result.messages,
        degraded=result.degraded,
        assignment_failed=result.assignment_failed,
    )
