"""OpenAI-backed insight endpoints."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from openai import OpenAIError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.domains.activities.services.activity_service import filter_activities
from lifetracker.domains.analytics.services import analytics_service
from lifetracker.domains.insights.services import summary_service

logger = logging.getLogger(__name__)

openai_api_bp = Blueprint("openai_api", __name__)


@openai_api_bp.post("/fitness-summary")
@user_required
def fitness_summary():
    payload = request.get_json(silent=True) or {}
    try:
        start, end = analytics_service.resolve_period(payload.get("startDate"), payload.get("endDate"))
    except ValueError:
        return jsonify({"ok": False, "error": "invalid_date"}), 400
    user_id = current_user_id()
    activities = filter_activities(user_id, start_date=start, end_date=end)
    analytics = analytics_service.calculate_fitness_analytics(user_id, start, end)
    try:
        summary = summary_service.generate_fitness_summary(activities, analytics)
    except OpenAIError as exc:
        logger.error("Error generating fitness summary: %s", exc)
        body = {"ok": False, "error": "summary_unavailable"}
        if current_app.debug or current_app.testing:
            body["details"] = str(exc)
        return jsonify(body), 502
    return jsonify({"ok": True, "summary": summary})
