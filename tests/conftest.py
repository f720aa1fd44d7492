"""
Pytest configuration and fixtures for ClearVision.

Every test gets a fresh in-memory store and a scripted text generator, so no
test touches the real database or the Gemini API.
"""

from datetime import datetime, timezone
from typing import List, Tuple

import pytest
import pytest_asyncio

from app.models.user import MemberStatusEnum, RoleEnum
from app.services.database_service import DatabaseService
from app.services.store import MemoryDataStore
from app.services.text_generation import TextGenerator


class FakeGenerator(TextGenerator):
    """Records every prompt and answers with a fixed reply."""

    def __init__(self, reply: str = "Here is what I'm doing for the team."):
        self.reply = reply
        self.calls: List[Tuple[str, int]] = []

    async def generate(self, prompt: str, max_tokens: int) -> str:
        self.calls.append((prompt, max_tokens))
        return self.reply


@pytest.fixture
def store():
    return MemoryDataStore()


@pytest.fixture
def db(store):
    return DatabaseService(store)


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 13, 9, 30, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def team(db):
    """A founder, two active members, one flagged, and one soft-removed."""
    founder = await db.create_user(
        user_id="founder_1", email="founder@clearvision.org", name="Dana Founder", role=RoleEnum.FOUNDER
    )
    alex = await db.create_user(user_id="member_1", email="alex@clearvision.org", name="Alex Johnson")
    sarah = await db.create_user(user_id="member_2", email="sarah@clearvision.org", name="Sarah Chen")
    mike = await db.create_user(
        user_id="member_3", email="mike@clearvision.org", name="Mike Rodriguez", status=MemberStatusEnum.FLAGGED
    )
    gone = await db.create_user(user_id="member_4", email="gone@clearvision.org", name="Gone Member")
    await db.remove_member(gone.id)
    gone = await db.get_member(gone.id)
    return {"founder": founder, "alex": alex, "sarah": sarah, "mike": mike, "gone": gone}
