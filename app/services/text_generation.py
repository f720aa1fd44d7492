"""
Gemini-backed text generation.

Produces the advisory replies shown in the founder ask bar and the feedback
shown to a member after a task submission. Replies are display-only and are
never parsed back into structured data.

Falls back to a canned local generator when no GEMINI_API_KEY is set.
"""

import logging
from typing import Iterable, Optional

import httpx

from app.config import settings
from app.exceptions import TextGenerationError

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

ADVISORY_MAX_TOKENS = 500
FEEDBACK_MAX_TOKENS = 300


class TextGenerator:
    """Stateless ``generate(prompt, max_tokens) -> text`` contract."""

    async def generate(self, prompt: str, max_tokens: int) -> str:
        raise NotImplementedError


class GeminiTextGenerator(TextGenerator):
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport

    async def generate(self, prompt: str, max_tokens: int) -> str:
        url = GEMINI_URL.format(model=self.model)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    url,
                    params={"key": self.api_key},
                    headers={"Content-Type": "application/json"},
                    json={
                        "contents": [{
                            "parts": [{"text": prompt}]
                        }],
                        "generationConfig": {
                            "temperature": 0.7,
                            "maxOutputTokens": max_tokens,
                        },
                    },
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            logger.exception("Gemini request failed")
            raise TextGenerationError(
                "Text generation request failed", error_code="GENERATION_FAILED"
            ) from e

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected Gemini payload: {data!r}")
            raise TextGenerationError(
                "Text generation returned no text", error_code="GENERATION_EMPTY"
            ) from e


class LocalTextGenerator(TextGenerator):
    """Canned replies for development without an API key."""

    async def generate(self, prompt: str, max_tokens: int) -> str:
        if "completion report" in prompt:
            text = (
                "Thanks for the detailed report. Rating: 4/5. "
                "Your submission covers the task well; next time, list the "
                "contacts or grants you followed up on so progress is easy to track."
            )
        else:
            text = (
                "Understood. I've reviewed your request and will take action on it. "
                "Tasks for active team members are created automatically when you ask "
                "me to assign tasks, and each member will see them on their dashboard."
            )
        return text[: max_tokens * 4]


def build_text_generator() -> TextGenerator:
    """Pick Gemini when an API key is configured, otherwise the local generator."""
    api_key = settings.GEMINI_API_KEY.strip()
    if not api_key:
        logger.warning("GEMINI_API_KEY not set, using local text generator")
        return LocalTextGenerator()
    return GeminiTextGenerator(
        api_key=api_key,
        model=settings.GEMINI_MODEL,
        timeout=settings.GEMINI_TIMEOUT_SECONDS,
    )


# ── Prompts ──

def build_advisory_prompt(request: str, member_names: Iterable[str]) -> str:
    org = settings.ORG_NAME
    return f"""You are an AI assistant for {org}'s team management system. The founder is asking: "{request}"

Context: You help manage team tasks, generate reports, assign tasks, and provide insights about team performance. You can:
1. Assign new tasks to team members (both one-time and recurring)
2. Generate reports about team performance
3. Provide insights about specific team members
4. Create custom task assignments
5. Analyze team productivity and suggest improvements

Current team members: {', '.join(member_names)}

Respond as if you're taking action on their request. Be specific about what you're doing and provide actionable next steps. If they're asking you to assign tasks, explain what tasks you're creating and for whom."""


def build_feedback_prompt(title: str, description: str, details: str) -> str:
    org = settings.ORG_NAME
    return f"""You are an AI assistant for {org}. A team member has submitted their task completion report.

Task: {title}
Task Description: {description}
Member Submission: {details}

Please provide constructive feedback on their submission. Rate their work on a scale of 1-5 and provide specific suggestions for improvement if needed. Be encouraging but honest."""
