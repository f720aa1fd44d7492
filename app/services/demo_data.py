"""Demo team and tasks, used by ``seed_db.py`` and the in-memory demo store."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from app.models.task import TaskCategoryEnum, TaskStatusEnum, TaskTypeEnum
from app.models.user import MemberStatusEnum, RoleEnum
from app.services.database_service import DatabaseService
from app.utils.weeks import week_stamp

logger = logging.getLogger(__name__)

DEMO_FOUNDER_ID = "demo_founder"

MEMBERS = [
    # (user_id, email, name, status, joined, streak, missed)
    ("member_1", "alex@clearvision.org", "Alex Johnson", MemberStatusEnum.ACTIVE, "2024-01-15", 3, 0),
    ("member_2", "sarah@clearvision.org", "Sarah Chen", MemberStatusEnum.ACTIVE, "2024-02-01", 2, 1),
    ("member_3", "mike@clearvision.org", "Mike Rodriguez", MemberStatusEnum.FLAGGED, "2024-01-20", 0, 3),
]

# (assignee, title, description, type, category, status, due in days, assigned days ago, explanation)
OPEN_TASKS = [
    (
        "member_1", "Apply to Gates Foundation Grant",
        "Research and submit application to the Gates Foundation for education-focused "
        "nonprofit grants. Focus on our literacy programs.",
        TaskTypeEnum.WEEKLY, TaskCategoryEnum.GRANT_APPLICATION, TaskStatusEnum.PENDING, 3, 0,
        "The Gates Foundation focuses heavily on education and global development. "
        "Emphasize measurable impact, scalability, and alignment with their priorities.",
    ),
    (
        "member_1", "Reach out to Local Corporate Sponsors",
        "Contact at least 5 local businesses for potential sponsorship opportunities. "
        "Focus on companies with CSR programs.",
        TaskTypeEnum.WEEKLY, TaskCategoryEnum.SPONSOR_OUTREACH, TaskStatusEnum.IN_PROGRESS, 2, 1,
        "Prepare a compelling one-page proposal highlighting mutual benefits and tailor "
        "it to each company's existing CSR initiatives.",
    ),
    (
        "member_2", "Ford Foundation Grant Application",
        "Complete application for Ford Foundation social justice grant program. "
        "Deadline is next week.",
        TaskTypeEnum.WEEKLY, TaskCategoryEnum.GRANT_APPLICATION, TaskStatusEnum.PENDING, 4, 0,
        "Ford Foundation prioritizes social justice and equity. Show how the work "
        "addresses systemic inequalities.",
    ),
    (
        "member_2", "Partner with University Research Center",
        "Establish partnership with local university research center for program "
        "evaluation and impact measurement.",
        TaskTypeEnum.CUSTOM, TaskCategoryEnum.PARTNER_CONTACT, TaskStatusEnum.PENDING, 7, 0,
        "Academic partnerships provide credibility and research expertise. Offer research "
        "opportunities in exchange for evaluation support.",
    ),
]

# (assignee, title, description, category, due days ago, assigned days ago, completed days ago)
COMPLETED_TASKS = [
    (
        "member_1", "United Way Grant Application",
        "Submitted comprehensive application to United Way for community development funding.",
        TaskCategoryEnum.GRANT_APPLICATION, 3, 7, 2,
    ),
    (
        "member_2", "Sponsor Outreach - Tech Companies",
        "Contacted 6 tech companies for potential sponsorship. Received positive responses from 2.",
        TaskCategoryEnum.SPONSOR_OUTREACH, 5, 9, 4,
    ),
]


async def seed_demo_data(
    db: DatabaseService,
    founder_user_id: str = DEMO_FOUNDER_ID,
    now: Optional[datetime] = None,
) -> Dict[str, int]:
    """Insert the demo founder, three members, and six tasks. Skips when users exist."""
    existing = await db.store.users.list(limit=1)
    if existing:
        logger.info("Skipping demo seed; users already exist.")
        return {"members": 0, "tasks": 0}

    now = now or datetime.now(timezone.utc)
    week_number, year = week_stamp(now)
    last_week, last_year = week_stamp(now - timedelta(days=7))

    await db.create_user(
        user_id=founder_user_id,
        email="founder@clearvision.org",
        name="Foundation Founder",
        role=RoleEnum.FOUNDER,
        joined_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    for user_id, email, name, status, joined, streak, missed in MEMBERS:
        await db.create_user(
            user_id=user_id,
            email=email,
            name=name,
            status=status,
            joined_at=datetime.fromisoformat(joined).replace(tzinfo=timezone.utc),
            task_completion_streak=streak,
            missed_weeks=missed,
        )

    for user_id, title, description, task_type, category, status, due_in, assigned_ago, explanation in OPEN_TASKS:
        await db.create_task(
            user_id=user_id,
            title=title,
            description=description,
            type=task_type,
            category=category,
            status=status,
            due_date=now + timedelta(days=due_in),
            assigned_at=now - timedelta(days=assigned_ago),
            week_number=week_number,
            year=year,
            ai_explanation=explanation,
            created_by=founder_user_id,
        )

    for user_id, title, description, category, due_ago, assigned_ago, completed_ago in COMPLETED_TASKS:
        await db.create_task(
            user_id=user_id,
            title=title,
            description=description,
            category=category,
            status=TaskStatusEnum.COMPLETED,
            due_date=now - timedelta(days=due_ago),
            assigned_at=now - timedelta(days=assigned_ago),
            completed_at=now - timedelta(days=completed_ago),
            week_number=last_week,
            year=last_year,
            created_by=founder_user_id,
        )

    tasks = len(OPEN_TASKS) + len(COMPLETED_TASKS)
    logger.info(f"Seeded {len(MEMBERS)} members and {tasks} tasks.")
    return {"members": len(MEMBERS), "tasks": tasks}
