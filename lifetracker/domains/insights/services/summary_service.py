"""Natural-language fitness summaries via OpenAI or Azure OpenAI."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from flask import current_app
from openai import AzureOpenAI, OpenAI

from lifetracker.core.errors import ApiError

logger = logging.getLogger(__name__)

MAX_ACTIVITIES_IN_PROMPT = 20

SYSTEM_PROMPT = (
    "You are a friendly fitness coach. Summarise the user's recent training in "
    "three or four sentences and finish with one concrete suggestion."
)


def is_configured() -> bool:
    config = current_app.config
    azure = config.get("AZURE_OPENAI_ENDPOINT") and config.get("AZURE_OPENAI_API_KEY")
    return bool(azure or config.get("OPENAI_API_KEY"))


def _client():
    config = current_app.config
    if config.get("AZURE_OPENAI_ENDPOINT") and config.get("AZURE_OPENAI_API_KEY"):
        return AzureOpenAI(
            azure_endpoint=config["AZURE_OPENAI_ENDPOINT"],
            api_key=config["AZURE_OPENAI_API_KEY"],
            api_version=config.get("AZURE_OPENAI_API_VERSION"),
        )
    return OpenAI(api_key=config["OPENAI_API_KEY"])


def mock_summary(analytics: Dict[str, Any]) -> str:
    count = analytics.get("activitiesCount", 0)
    if not count:
        return "No activities were logged in this period. Try scheduling a short session to get started."
    by_type = analytics.get("activityCountByType") or {}
    favourite = max(by_type, key=by_type.get) if by_type else "activity"
    return (
        f"You logged {count} activities over {analytics.get('activeDays', 0)} active days, "
        f"totalling {analytics.get('totalDuration', 0):g} minutes and "
        f"{analytics.get('totalCalories', 0):g} calories. "
        f"Your most frequent activity was {favourite}. Keep the streak going."
    )


def _user_prompt(activities: List[Dict[str, Any]], analytics: Dict[str, Any]) -> str:
    recent = [
        {key: activity.get(key) for key in ("type", "duration", "calories", "date")}
        for activity in activities[:MAX_ACTIVITIES_IN_PROMPT]
    ]
    return (
        "Analytics for the period:\n"
        f"{json.dumps(analytics, default=str)}\n"
        "Most recent activities:\n"
        f"{json.dumps(recent, default=str)}"
    )


def generate_fitness_summary(activities: List[Dict[str, Any]], analytics: Dict[str, Any]) -> str:
    if current_app.config.get("MOCK_OPENAI") or not is_configured():
        return mock_summary(analytics)
    response = _client().chat.completions.create(
        model=current_app.config.get("OPENAI_MODEL", "gpt-4o-mini"),
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": _user_prompt(activities, analytics)},
        ],
        max_tokens=300,
        temperature=0.7,
    )
    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise ApiError.internal("empty_summary")
    logger.info("Generated fitness summary (%d chars)", len(content))
    return content.strip()
