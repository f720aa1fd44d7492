"""Founder ask bar — advisory reply, interaction log, and keyword-driven task assignment."""

import logging
from dataclasses import dataclass, field
from typing import Any, List

from app.exceptions import DataStoreError, ValidationError
from app.models.ai_interaction import InteractionTypeEnum
from app.services.database_service import DatabaseService
from app.services.intent import Intent, classify_intent, describe_category, select_recipients
from app.services.task_lifecycle import TaskLifecycleManager
from app.services.text_generation import ADVISORY_MAX_TOKENS, TextGenerator, build_advisory_prompt

logger = logging.getLogger(__name__)

REPORT_MESSAGE = "Weekly performance report has been generated. Check the Analytics tab for details."
ASSIGNMENT_FAILED_MESSAGE = "Failed to create tasks. Please try again."


@dataclass
class AskResult:
    response: str
    intent: Intent
    tasks: List[Any] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)
    degraded: bool = False
    assignment_failed: bool = False


class AskBar:
    def __init__(self, db: DatabaseService, lifecycle: TaskLifecycleManager, generator: TextGenerator):
        self.db = db
        self.lifecycle = lifecycle
        self.generator = generator

    async def handle(self, founder: Any, prompt: str) -> AskResult:
        if not prompt or not prompt.strip():
            raise ValidationError("Please enter a request", error_code="EMPTY_PROMPT")

        degraded = False
        try:
            members = await self.db.get_team_members()
        except DataStoreError:
            logger.warning("Team members unavailable, continuing with an empty team")
            members = []
            degraded = True

        response = await self.generator.generate(
            build_advisory_prompt(prompt, [m.name for m in members]),
            ADVISORY_MAX_TOKENS,
        )

        await self.db.create_ai_interaction(
            user_id=founder.user_id,
            interaction_type=InteractionTypeEnum.ASK_BAR,
            prompt=prompt,
            response=response,
            context={"teamMembersCount": len(members)},
        )

        intent = classify_intent(prompt, response)
        result = AskResult(response=response, intent=intent, degraded=degraded)

        if intent.wants_assignment:
            recipients = select_recipients(members)
            try:
                result.tasks = await self.lifecycle.bulk_assign(recipients, intent, founder.user_id)
            except DataStoreError:
                # Tasks created before the failure are kept.
                logger.exception("Task assignment failed")
                result.assignment_failed = True
                result.messages.append(ASSIGNMENT_FAILED_MESSAGE)
            else:
                result.messages.append(
                    f"Created {len(recipients)} {describe_category(intent.category)} tasks "
                    "for active team members."
                )

        if intent.wants_report:
            result.messages.append(REPORT_MESSAGE)

        return result
