"""Journal JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.domains.analytics.services import analytics_service, journal_insights_service
from lifetracker.domains.journal.mappers import map_entry
from lifetracker.domains.journal.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryListFilter,
    JournalEntryUpdate,
)
from lifetracker.domains.journal.services import journal_service

journal_api_bp = Blueprint("journal_api", __name__)


@journal_api_bp.get("")
@user_required
def list_entries():
    raw = {key: value for key, value in request.args.items() if key != "tags"}
    tags = request.args.get("tags")
    if tags:
        raw["tags"] = [tag.strip() for tag in tags.split(",") if tag.strip()]
    try:
        filters = JournalEntryListFilter.model_validate(raw)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    items, total = journal_service.get_journal_entries_by_user_id(current_user_id(), **filters.model_dump())
    return jsonify(
        {
            "ok": True,
            "items": [map_entry(entry) for entry in items],
            "total": total,
            "limit": filters.limit,
            "offset": filters.offset,
        }
    )


@journal_api_bp.post("")
@user_required
def create_entry():
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    try:
        entry = journal_service.create_journal_entry(current_user_id(), **data.model_dump())
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "entry": map_entry(entry)}), 201



def _insights_enabled():
    if not current_app.config.get("ENABLE_ADVANCED_INSIGHTS"):
        return jsonify({"ok": False, "error": "insights_unavailable"}), 503
    return None


def _insight_period():
    return analytics_service.resolve_period(request.args.get("startDate"), request.args.get("endDate"))


@journal_api_bp.get("/insights/sentiment-trends")
@user_required
def sentiment_trends():
    unavailable = _insights_enabled()
    if unavailable:
        return unavailable
    try:
        start, end = _insight_period()
    except ValueError:
        return jsonify({"ok": False, "error": "invalid_date"}), 400
    trends = journal_insights_service.get_sentiment_trends(current_user_id(), start, end)
    return jsonify({"ok": True, "trends": trends})


@journal_api_bp.get("/insights/topic-analysis")
@user_required
def topic_analysis():
    unavailable = _insights_enabled()
    if unavailable:
        return unavailable
    try:
        start, end = _insight_period()
    except ValueError:
        return jsonify({"ok": False, "error": "invalid_date"}), 400
    topics = journal_insights_service.get_topic_analysis(current_user_id(), start, end)
    return jsonify({"ok": True, "topics": topics})


@journal_api_bp.get("/insights/mood-recommendations")
@user_required
def mood_recommendations():
    unavailable = _insights_enabled()
    if unavailable:
        return unavailable
    limit = request.args.get("limit", default=10, type=int)
    if limit is None or not 1 <= limit <= 100:
        return jsonify({"ok": False, "error": "invalid_limit"}), 400
    insights = journal_insights_service.get_mood_insights(current_user_id(), limit)
    return jsonify({"ok": True, "insights": insights})

@journal_api_bp.get("/<entry_id>")
@user_required
def entry_detail(entry_id: str):
    entry = journal_service.get_journal_entry_by_id(current_user_id(), entry_id)
    if not entry:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "entry": map_entry(entry)})


@journal_api_bp.put("/<entry_id>")
@user_required
def update_entry(entry_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryUpdate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    try:
        entry = journal_service.update_journal_entry(
            current_user_id(), entry_id, **data.model_dump(exclude_unset=True)
        )
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    if not entry:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "entry": map_entry(entry)})


@journal_api_bp.delete("/<entry_id>")
@user_required
def delete_entry(entry_id: str):
    if not journal_service.delete_journal_entry(current_user_id(), entry_id):
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})
