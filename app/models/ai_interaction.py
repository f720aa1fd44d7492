"""AI interaction model — a log of prompts sent to the text generator."""

import enum
import json
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Enum, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class InteractionTypeEnum(str, enum.Enum):
    ASK_BAR = "ask_bar"
    TASK_FEEDBACK = "task_feedback"
    TASK_ASSIGNMENT = "task_assignment"
    REPORT_GENERATION = "report_generation"
    OTHER = "other"


class AiInteraction(Base):
    __tablename__ = "ai_interactions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    interaction_type: Mapped[InteractionTypeEnum] = mapped_column(
        Enum(InteractionTypeEnum), default=InteractionTypeEnum.OTHER
    )
    prompt: Mapped[str] = mapped_column(Text, default="")
    response: Mapped[str] = mapped_column(Text, default="")

    # ── JSON object (stored as Text for SQLite compat) ──
    context: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    @property
    def context_data(self) -> Dict[str, Any]:
        try:
            return json.loads(self.context or "{}")
        except (json.JSONDecodeError, TypeError):
            return {}
