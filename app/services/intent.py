"""
Keyword intent matching for the founder ask bar.

Each axis is a case-insensitive substring test where the first match wins.
The branch order and the ``other`` / ``weekly`` fallbacks are fixed:
"research" never maps to the research category, "one_time" is never
produced, and names in the prompt ("to Sarah") are not used for targeting.
"""

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional

from app.config import settings
from app.models.task import TaskCategoryEnum, TaskTypeEnum
from app.models.user import MemberStatusEnum, TeamMember


@dataclass(frozen=True)
class Intent:
    category: TaskCategoryEnum
    task_type: TaskTypeEnum
    wants_assignment: bool
    wants_report: bool


class TaskTemplate(NamedTuple):
    title: str
    description: str
    explanation: str


def classify_intent(prompt: str, advisory: Optional[str] = None) -> Intent:
    """Classify a founder request. Never fails.

    ``advisory`` is the generated reply for the same request; it is accepted
    so callers can pass it along but it is not inspected.
    """
    text = (prompt or "").lower()

    if "grant" in text:
        category = TaskCategoryEnum.GRANT_APPLICATION
    elif "sponsor" in text:
        category = TaskCategoryEnum.SPONSOR_OUTREACH
    elif "partner" in text:
        category = TaskCategoryEnum.PARTNER_CONTACT
    else:
        category = TaskCategoryEnum.OTHER

    if "custom" in text or "one-time" in text:
        task_type = TaskTypeEnum.CUSTOM
    else:
        task_type = TaskTypeEnum.WEEKLY

    return Intent(
        category=category,
        task_type=task_type,
        wants_assignment="assign" in text and "task" in text,
        wants_report="report" in text or "summary" in text,
    )


def select_recipients(members: Iterable[TeamMember]) -> List[TeamMember]:
    """Every active member. Soft-removed, flagged and on-leave members are skipped."""
    return [m for m in members if m.status == MemberStatusEnum.ACTIVE]


def task_template(category: TaskCategoryEnum) -> TaskTemplate:
    org = settings.ORG_NAME
    if category == TaskCategoryEnum.GRANT_APPLICATION:
        return TaskTemplate(
            "Weekly Grant Application Task",
            f"Research and apply to at least 2 relevant grants for {org}. "
            "Focus on grants that align with our mission and programs.",
            "Grant applications are crucial for nonprofit funding. Research foundations "
            "that support causes similar to ours, read their guidelines carefully, and "
            "submit compelling applications that demonstrate our impact and need.",
        )
    if category == TaskCategoryEnum.SPONSOR_OUTREACH:
        return TaskTemplate(
            "Weekly Sponsor Outreach Task",
            "Contact at least 5 potential sponsors including local businesses, "
            "corporations, or community organizations for partnership opportunities.",
            "Sponsor outreach helps diversify our funding sources. Focus on businesses "
            "that align with our values, prepare personalized pitches, and follow up "
            "professionally. Track all contacts and responses.",
        )
    return TaskTemplate(
        "Weekly Team Task",
        f"Complete assigned weekly responsibilities to support {org} operations.",
        "This task supports our foundation's ongoing operations. Please complete it "
        "thoroughly and submit your progress by the due date.",
    )


def describe_category(category: TaskCategoryEnum) -> str:
    """Human label used in confirmation messages, e.g. ``grant application``."""
    return category.value.replace("_", " ", 1)
