"""Analytics JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.domains.analytics.services import analytics_service

analytics_api_bp = Blueprint("analytics_api", __name__)


@analytics_api_bp.get("/fitness")
@user_required
def fitness_analytics():
    try:
        start, end = analytics_service.resolve_period(request.args.get("startDate"), request.args.get("endDate"))
    except ValueError:
        return jsonify({"ok": False, "error": "invalid_date"}), 400
    analytics = analytics_service.calculate_fitness_analytics(current_user_id(), start, end)
    return jsonify({"ok": True, "analytics": analytics})


@analytics_api_bp.get("/weekly-trends")
@user_required
def weekly_trends():
    trends = analytics_service.calculate_weekly_trends(current_user_id())
    return jsonify({"ok": True, "trends": trends})
