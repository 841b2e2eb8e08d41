from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

if TYPE_CHECKING:
    from ..recommendations.models import UserPreferences

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a friendly rental advisor. Write short, conversational "
    "summaries of property matches for a renter. Never invent facts that "
    "are not in the listing details you are given."
)


class SummaryError(RuntimeError):
    """The summarizer produced no usable text."""


class Summarizer(Protocol):
    def summarize(
        self,
        top_entries: list[dict[str, Any]],
        preferences: UserPreferences,
    ) -> str: ...


def _format_budget(preferences: UserPreferences) -> str:
    return f"{preferences.budget.min:.0f}-{preferences.budget.max:.0f}"


def build_prompt(
    top_entries: list[dict[str, Any]],
    preferences: UserPreferences,
) -> str:
    locations = ", ".join(preferences.location) or "any location"
    lines = [
        f"Based on user preferences for {preferences.lifestyle} lifestyle, "
        f"{preferences.work_style} work style, budget {_format_budget(preferences)}, "
        f"and {preferences.bedrooms} bedrooms in {locations}, create a brief "
        "personalized summary (max 150 words) for these top property matches:",
        "",
    ]
    for entry in top_entries[:3]:
        reasons = ", ".join(entry.get("reasons", []))
        lines.append(
            f"- {entry['title']} in {entry.get('city') or 'an unlisted city'} "
            f"({entry['match_percentage']}% match): {reasons}"
        )
    lines.append("")
    lines.append(
        "Make it conversational and highlight why these are perfect for their lifestyle."
    )
    return "\n".join(lines)


class GroqSummarizer:
    """Summarizer backed by Groq chat completions.

    Errors propagate to the caller, which decides on the fallback text.
    """

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG) -> None:
        self.config = config

    def summarize(
        self,
        top_entries: list[dict[str, Any]],
        preferences: UserPreferences,
    ) -> str:
        client = Groq(api_key=self.config.api_key, timeout=self.config.timeout)
        response = client.chat.completions.create(
            model=self.config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(top_entries, preferences)},
            ],
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )

        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise SummaryError("Groq returned an empty summary")
        return content


def build_summarizer(config: LLMConfig = DEFAULT_LLM_CONFIG) -> Summarizer | None:
    """Return a Groq summarizer, or ``None`` when AI summaries are off."""
    if not config.enabled or not config.api_key:
        logger.info("AI summaries disabled (enabled=%s, api key set=%s)", config.enabled, bool(config.api_key))
        return None
    return GroqSummarizer(config)
