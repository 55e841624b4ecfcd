"""Task JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.domains.tasks.mappers import map_task
from lifetracker.domains.tasks.models.task_model import TaskModel
from lifetracker.domains.tasks.schemas.task_schemas import AttachmentCreate, TaskCreate, TaskUpdate

task_api_bp = Blueprint("task_api", __name__)

TASK_STATUSES = ("todo", "in-progress", "completed", "blocked")


def _owned_task(model: TaskModel, task_id: str):
    task = model.find_task(task_id)
    if not task:
        return None, (jsonify({"ok": False, "error": "not_found"}), 404)
    if task.get("userId") != current_user_id():
        return None, (jsonify({"ok": False, "error": "forbidden"}), 403)
    return task, None


@task_api_bp.get("")
@user_required
def list_tasks():
    model = TaskModel()
    status = request.args.get("status")
    if status:
        if status not in TASK_STATUSES:
            return jsonify({"ok": False, "error": "invalid_status"}), 400
        tasks = model.get_tasks_by_status(current_user_id(), status)
    else:
        tasks = model.get_user_tasks(current_user_id())
    return jsonify({"ok": True, "tasks": [map_task(task) for task in tasks]})


@task_api_bp.get("/due-soon")
@user_required
def tasks_due_soon():
    days = request.args.get("days", default=7, type=int)
    if days is None or days < 0:
        return jsonify({"ok": False, "error": "invalid_days"}), 400
    tasks = TaskModel().get_tasks_due_soon(current_user_id(), days)
    return jsonify({"ok": True, "tasks": [map_task(task) for task in tasks]})


@task_api_bp.get("/project/<project_id>")
@user_required
def project_tasks(project_id: str):
    model = TaskModel()
    status = request.args.get("status")
    if status:
        tasks = model.get_tasks_by_status(current_user_id(), status, project_id=project_id)
    else:
        tasks = model.get_project_tasks(current_user_id(), project_id)
    return jsonify({"ok": True, "tasks": [map_task(task) for task in tasks]})


@task_api_bp.post("")
@user_required
def create_task():
    payload = request.get_json(silent=True) or {}
    try:
        data = TaskCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    task = TaskModel().create_task(current_user_id(), **data.model_dump())
    return jsonify({"ok": True, "task": map_task(task)}), 201


@task_api_bp.get("/<task_id>")
@user_required
def task_detail(task_id: str):
    task, error = _owned_task(TaskModel(), task_id)
    if error:
        return error
    return jsonify({"ok": True, "task": map_task(task)})


@task_api_bp.put("/<task_id>")
@user_required
def update_task(task_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = TaskUpdate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    model = TaskModel()
    _, error = _owned_task(model, task_id)
    if error:
        return error
    task = model.update_task(current_user_id(), task_id, data.model_dump(by_alias=True, exclude_unset=True))
    return jsonify({"ok": True, "task": map_task(task)})


@task_api_bp.post("/<task_id>/complete")
@user_required
def complete_task(task_id: str):
    model = TaskModel()
    _, error = _owned_task(model, task_id)
    if error:
        return error
    task = model.complete_task(current_user_id(), task_id)
    return jsonify({"ok": True, "task": map_task(task)})


@task_api_bp.post("/<task_id>/attachments")
@user_required
def add_attachment(task_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        data = AttachmentCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}), 400
    model = TaskModel()
    _, error = _owned_task(model, task_id)
    if error:
        return error
    task = model.add_attachment(current_user_id(), task_id, **data.model_dump())
    return jsonify({"ok": True, "task": map_task(task)}), 201


@task_api_bp.delete("/<task_id>/attachments/<attachment_id>")
@user_required
def remove_attachment(task_id: str, attachment_id: str):
    model = TaskModel()
    _, error = _owned_task(model, task_id)
    if error:
        return error
    task = model.remove_attachment(current_user_id(), task_id, attachment_id)
    return jsonify({"ok": True, "task": map_task(task)})


@task_api_bp.delete("/<task_id>")
@user_required
def delete_task(task_id: str):
    model = TaskModel()
    _, error = _owned_task(model, task_id)
    if error:
        return error
    model.delete_task(current_user_id(), task_id)
    return jsonify({"ok": True})
