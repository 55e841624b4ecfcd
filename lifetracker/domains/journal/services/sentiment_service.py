"""Sentiment scoring for journal entries (0 negative .. 1 positive)."""

from __future__ import annotations

import logging
import re

import requests
from flask import current_app

logger = logging.getLogger(__name__)

POSITIVE_WORDS = ("happy", "good", "great", "excellent", "wonderful", "amazing", "love", "enjoy")
NEGATIVE_WORDS = ("sad", "bad", "terrible", "awful", "horrible", "hate", "dislike", "disappointed")
NEUTRAL_SCORE = 0.5

_SENTIMENT_PATH = "/text/analytics/v3.1/sentiment"


def _count(words, text: str) -> int:
    return sum(len(re.findall(rf"\b{word}\b", text)) for word in words)


def lexical_sentiment(content: str) -> float:
    lowered = (content or "").lower()
    positive = _count(POSITIVE_WORDS, lowered)
    negative = _count(NEGATIVE_WORDS, lowered)
    if positive == 0 and negative == 0:
        return NEUTRAL_SCORE
    return positive / (positive + negative)


def _remote_sentiment(content: str, endpoint: str, key: str, timeout: int) -> float:
    resp = requests.post(
        f"{endpoint}{_SENTIMENT_PATH}",
        headers={"Ocp-Apim-Subscription-Key": key, "Content-Type": "application/json"},
        json={"documents": [{"id": "1", "language": "en", "text": content}]},
        timeout=timeout,
    )
    resp.raise_for_status()
    documents = resp.json().get("documents") or []
    if not documents:
        raise ValueError("empty sentiment response")
    return float(documents[0]["confidenceScores"]["positive"])


def analyze_sentiment(content: str) -> float:
    """Score with Azure Text Analytics when configured, else the word-list heuristic."""
    endpoint = current_app.config.get("TEXT_ANALYTICS_ENDPOINT")
    key = current_app.config.get("TEXT_ANALYTICS_KEY")
    if not endpoint or not key:
        return lexical_sentiment(content)
    timeout = int(current_app.config.get("TEXT_ANALYTICS_TIMEOUT_SECONDS", 10))
    try:
        return _remote_sentiment(content, endpoint, key, timeout)
    except (requests.RequestException, ValueError, KeyError) as exc:
        logger.warning("Text Analytics sentiment failed, using word-list score: %s", exc)
        return lexical_sentiment(content)
