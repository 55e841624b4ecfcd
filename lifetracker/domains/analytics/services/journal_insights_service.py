"""Journal insights built from stored sentiment scores and tags.

Scores are the ``sentimentScore`` values written when entries are saved
(0 negative, 1 positive). Topics are entry tags.
"""

from __future__ import annotations

import math
import re
from collections import Counter, defaultdict
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List

from lifetracker.core.utils.dates import parse_datetime
from lifetracker.domains.journal.services.journal_service import get_entries_between, get_recent_entries

EMOTION_KEYWORDS = {
    "joy": ("happy", "happiness", "joy", "excited", "thrilled", "delighted", "pleased", "glad"),
    "sadness": ("sad", "sadness", "unhappy", "depressed", "miserable", "melancholy", "blue", "down"),
    "anger": ("angry", "anger", "mad", "furious", "irritated", "annoyed", "frustrated", "rage"),
    "fear": ("afraid", "fear", "scared", "anxious", "worried", "nervous", "terrified", "panic"),
    "surprise": ("surprised", "surprise", "amazed", "astonished", "shocked", "startled"),
    "love": ("love", "loved", "adore", "cherish", "affection", "caring", "fond"),
    "gratitude": ("grateful", "thankful", "appreciate", "gratitude", "blessed", "fortunate"),
    "calm": ("calm", "peaceful", "relaxed", "serene", "tranquil", "content", "ease"),
}
TOP_EMOTIONS = 5
TOP_TOPICS = 10
POSITIVE_THRESHOLD = 0.6
NEGATIVE_THRESHOLD = 0.4

_WORD = re.compile(r"[a-z']+")


def _score(entry: Dict[str, Any]) -> float:
    return float(entry.get("sentimentScore") or 0)


def _mean(values: Iterable[float]) -> float:
    values = list(values)
    return sum(values) / len(values) if values else 0


def _grouped_average(entries: Iterable[Dict[str, Any]], bucket) -> List[tuple]:
    groups: Dict[str, List[float]] = defaultdict(list)
    for entry in entries:
        day = parse_datetime(entry.get("date"))
        if day is not None:
            groups[bucket(day)].append(_score(entry))
    return [(key, _mean(scores)) for key, scores in sorted(groups.items())]


def _week_start(day: datetime) -> str:
    return (day.date() - timedelta(days=day.weekday())).isoformat()


def top_emotions(entries: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Emotions named in the entries; each counts at most once per entry."""
    counts: Counter = Counter()
    for entry in entries:
        words = set(_WORD.findall((entry.get("content") or "").lower()))
        for emotion, keywords in EMOTION_KEYWORDS.items():
            if words.intersection(keywords):
                counts[emotion] += 1
    return [{"emotion": emotion, "frequency": count} for emotion, count in counts.most_common(TOP_EMOTIONS)]


def get_sentiment_trends(user_id: str, start: datetime, end: datetime) -> Dict[str, Any]:
    entries = get_entries_between(user_id, start, end)
    if not entries:
        return {"averageSentiment": 0, "trendByDay": [], "trendByWeek": [], "trendByMonth": [], "topEmotions": []}
    return {
        "averageSentiment": _mean(_score(entry) for entry in entries),
        "trendByDay": [
            {"date": key, "sentiment": value}
            for key, value in _grouped_average(entries, lambda day: day.date().isoformat())
        ],
        "trendByWeek": [
            {"weekStart": key, "sentiment": value} for key, value in _grouped_average(entries, _week_start)
        ],
        "trendByMonth": [
            {"month": key, "sentiment": value}
            for key, value in _grouped_average(entries, lambda day: day.strftime("%Y-%m"))
        ],
        "topEmotions": top_emotions(entries),
    }


def get_topic_analysis(user_id: str, start: datetime, end: datetime) -> Dict[str, Any]:
    entries = get_entries_between(user_id, start, end)
    counts: Counter = Counter()
    scores: Dict[str, List[float]] = defaultdict(list)
    for entry in entries:
        for tag in entry.get("tags") or []:
            counts[tag] += 1
            scores[tag].append(_score(entry))
    topic_sentiment = [{"topic": tag, "sentiment": _mean(values)} for tag, values in scores.items()]
    topic_sentiment.sort(key=lambda item: item["sentiment"], reverse=True)
    return {
        "topTopics": [{"topic": tag, "frequency": count} for tag, count in counts.most_common(TOP_TOPICS)],
        "topicSentiment": topic_sentiment,
    }


def describe_trend(entries: List[Dict[str, Any]]) -> str:
    """Compare the older and newer halves of the entries."""
    if len(entries) < 3:
        return "There's not enough data to identify a clear trend."
    ordered = sorted(entries, key=lambda entry: entry.get("date") or "")
    middle = len(ordered) // 2
    difference = _mean(_score(e) for e in ordered[middle:]) - _mean(_score(e) for e in ordered[:middle])
    if difference >= 0.2:
        return "Your mood has been improving significantly."
    if difference >= 0.05:
        return "Your mood has been gradually improving."
    if difference <= -0.2:
        return "Your mood has been declining significantly."
    if difference <= -0.05:
        return "Your mood has been gradually declining."
    return "Your mood has been relatively stable."


def _mood_summary(average: float, trend: str) -> str:
    if average >= 0.8:
        return f"Your recent journal entries show very positive emotions. {trend} Your overall mood has been excellent."
    if average >= 0.6:
        return f"Your recent journal entries reflect positive emotions. {trend} You've been in good spirits overall."
    if average >= 0.4:
        return f"Your recent journal entries show balanced emotions. {trend} Your mood has been generally neutral."
    if average >= 0.2:
        return (
            f"Your recent journal entries indicate some challenging emotions. {trend} "
            "You may be going through a difficult time."
        )
    return (
        f"Your recent journal entries reflect primarily negative emotions. {trend} "
        "You may want to reach out for support."
    )


def _recommendations(average: float) -> List[str]:
    recommendations = ["Continue journaling regularly to track your emotional patterns."]
    if average < 0.4:
        recommendations += [
            "Consider activities that have previously improved your mood.",
            "Try incorporating more positive reflections in your journaling practice.",
            "Look for supportive resources if you're feeling consistently low.",
        ]
    elif average < 0.6:
        recommendations += [
            "Try to identify what factors contribute to your more positive entries.",
            "Consider setting aside time for activities that bring you joy.",
        ]
    else:
        recommendations += [
            "Reflect on what's contributing to your positive outlook.",
            "Consider sharing your positive practices with others who might benefit.",
        ]
    return recommendations


def common_tags(entries: List[Dict[str, Any]]) -> List[str]:
    """Tags on at least two entries and at least a quarter of them."""
    if not entries:
        return []
    counts = Counter(tag for entry in entries for tag in entry.get("tags") or [])
    threshold = max(2, math.ceil(len(entries) * 0.25))
    return [tag for tag, count in counts.items() if count >= threshold]


def get_mood_insights(user_id: str, limit: int = 10) -> Dict[str, Any]:
    entries = get_recent_entries(user_id, limit)
    if not entries:
        return {
            "moodSummary": "Not enough data to generate insights.",
            "recommendations": ["Start journaling regularly to receive personalized insights."],
            "positivePatterns": [],
            "improvementAreas": [],
        }

    average = _mean(_score(entry) for entry in entries)
    positive = [entry for entry in entries if _score(entry) >= POSITIVE_THRESHOLD]
    negative = [entry for entry in entries if _score(entry) <= NEGATIVE_THRESHOLD]
    positive_patterns = [
        f'Journal entries about "{tag}" are associated with positive emotions.' for tag in common_tags(positive)
    ]
    improvement_areas = [
        f'Journal entries about "{tag}" tend to have lower sentiment scores.' for tag in common_tags(negative)
    ]
    if not positive_patterns and positive:
        positive_patterns.append("You generally express positive emotions in your journal entries.")
    if not improvement_areas and negative:
        improvement_areas.append("Consider exploring the factors behind your less positive journal entries.")

    return {
        "moodSummary": _mood_summary(average, describe_trend(entries)),
        "recommendations": _recommendations(average),
        "positivePatterns": positive_patterns,
        "improvementAreas": improvement_areas,
    }
