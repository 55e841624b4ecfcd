"""Fitness analytics computed from logged activities."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from lifetracker.core.utils.dates import parse_datetime, utc_now
from lifetracker.domains.activities.services.activity_service import filter_activities


def _empty_analytics() -> Dict[str, Any]:
    return {
        "totalDuration": 0,
        "totalCalories": 0,
        "averageDurationPerDay": 0,
        "averageCaloriesPerDay": 0,
        "activityCountByType": {},
        "caloriesByType": {},
        "durationByType": {},
        "activeDays": 0,
        "activitiesCount": 0,
    }


def calculate_fitness_analytics(user_id: str, start_date: datetime, end_date: datetime) -> Dict[str, Any]:
    """Totals, per-type breakdowns and per-active-day averages for a period.

    Averages divide by the number of distinct calendar days (UTC) with at
    least one activity, not by the length of the period.
    """
    activities = filter_activities(user_id, start_date=start_date, end_date=end_date)
    if not activities:
        return _empty_analytics()

    count_by_type: Dict[str, int] = defaultdict(int)
    calories_by_type: Dict[str, float] = defaultdict(float)
    duration_by_type: Dict[str, float] = defaultdict(float)
    active_days = set()
    total_duration = 0.0
    total_calories = 0.0
    for activity in activities:
        kind = activity.get("type") or "other"
        duration = float(activity.get("duration") or 0)
        calories = float(activity.get("calories") or 0)
        total_duration += duration
        total_calories += calories
        count_by_type[kind] += 1
        calories_by_type[kind] += calories
        duration_by_type[kind] += duration
        day = parse_datetime(activity.get("date"))
        if day is not None:
            active_days.add(day.date())

    days = len(active_days)
    return {
        "totalDuration": total_duration,
        "totalCalories": total_calories,
        "averageDurationPerDay": total_duration / days if days else 0,
        "averageCaloriesPerDay": total_calories / days if days else 0,
        "activityCountByType": dict(count_by_type),
        "caloriesByType": dict(calories_by_type),
        "durationByType": dict(duration_by_type),
        "activeDays": days,
        "activitiesCount": len(activities),
    }


def percentage_change(previous: float, current: float) -> float:
    if previous == 0:
        return 100 if current > 0 else 0
    return (current - previous) / previous * 100


def calculate_weekly_trends(user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Compare the last seven days with the seven days before them."""
    current_end = now or utc_now()
    current_start = current_end - timedelta(days=7)
    previous_end = current_start - timedelta(days=1)
    previous_start = previous_end - timedelta(days=6)

    current = calculate_fitness_analytics(user_id, current_start, current_end)
    previous = calculate_fitness_analytics(user_id, previous_start, previous_end)
    return {
        "current": current,
        "previous": previous,
        "changes": {
            "durationChange": percentage_change(previous["totalDuration"], current["totalDuration"]),
            "caloriesChange": percentage_change(previous["totalCalories"], current["totalCalories"]),
            "activityCountChange": percentage_change(previous["activitiesCount"], current["activitiesCount"]),
        },
    }


def resolve_period(
    start_raw: Optional[str], end_raw: Optional[str], default_days: int = 30
) -> Tuple[datetime, datetime]:
    """Parse an optional ``[start, end]`` pair; missing start means ``default_days`` before end."""
    end = parse_datetime(end_raw) if end_raw else utc_now()
    start = parse_datetime(start_raw) if start_raw else None
    if end is None or (start_raw and start is None):
        raise ValueError("invalid_date")
    if start is None:
        start = end - timedelta(days=default_days)
    return start, end
