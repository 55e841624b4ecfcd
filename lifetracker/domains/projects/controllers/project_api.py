"""Project JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from lifetracker.core.auth.identity import current_user_id, user_required
from lifetracker.domains.projects.mappers import map_project
from lifetracker.domains.projects.models.project_model import MANAGER_ROLES, ProjectModel, member_role
from lifetracker.domains.projects.schemas.project_schemas import (
    MemberAdd,
    MemberRoleUpdate,
    ProjectCreate,
    ProjectUpdate,
)
from lifetracker.domains.users.services.profile_service import find_profile_by_email

project_api_bp = Blueprint("project_api", __name__)


def _project_for(model: ProjectModel, project_id: str, roles=None):
    """Load a project the caller belongs to, optionally requiring one of ``roles``."""
    project = model.find_project(project_id)
    if not project:
        return None, (jsonify({"ok": False, "error": "not_found"}), 404)
    role = member_role(project, current_user_id())
    if role is None or (roles is not None and role not in roles):
        return None, (jsonify({"ok": False, "error": "forbidden"}), 403)
    return project, None


def _validate(schema_cls):
    payload = request.get_json(silent=True) or {}
    try:
        return schema_cls.model_validate(payload), None
    except ValidationError as exc:
        return None, (
            jsonify({"ok": False, "error": "validation_error", "details": exc.errors(include_context=False)}),
            400,
        )


@project_api_bp.get("")
@user_required
def list_projects():
    projects = ProjectModel().get_user_projects(current_user_id())
    return jsonify({"ok": True, "projects": [map_project(project) for project in projects]})


@project_api_bp.get("/active")
@user_required
def active_projects():
    projects = ProjectModel().get_active_projects(current_user_id())
    return jsonify({"ok": True, "projects": [map_project(project) for project in projects]})


@project_api_bp.get("/owned")
@user_required
def owned_projects():
    projects = ProjectModel().get_owned_projects(current_user_id())
    return jsonify({"ok": True, "projects": [map_project(project) for project in projects]})


@project_api_bp.post("")
@user_required
def create_project():
    data, error = _validate(ProjectCreate)
    if error:
        return error
    project = ProjectModel().create_project(current_user_id(), **data.model_dump())
    return jsonify({"ok": True, "project": map_project(project)}), 201


@project_api_bp.get("/<project_id>")
@user_required
def project_detail(project_id: str):
    project, error = _project_for(ProjectModel(), project_id)
    if error:
        return error
    return jsonify({"ok": True, "project": map_project(project)})


@project_api_bp.put("/<project_id>")
@user_required
def update_project(project_id: str):
    data, error = _validate(ProjectUpdate)
    if error:
        return error
    model = ProjectModel()
    project, error = _project_for(model, project_id, MANAGER_ROLES)
    if error:
        return error
    project = model.update_project(project, data.model_dump(by_alias=True, exclude_unset=True))
    return jsonify({"ok": True, "project": map_project(project)})


@project_api_bp.post("/<project_id>/members")
@user_required
def add_member(project_id: str):
    data, error = _validate(MemberAdd)
    if error:
        return error
    model = ProjectModel()
    project, error = _project_for(model, project_id, MANAGER_ROLES)
    if error:
        return error
    user_id = data.user_id
    if not user_id:
        profile = find_profile_by_email(str(data.member_email))
        if not profile:
            return jsonify({"ok": False, "error": "user_not_found"}), 404
        user_id = profile["id"]
    project = model.add_member(project, user_id, data.role)
    return jsonify({"ok": True, "project": map_project(project)})


@project_api_bp.delete("/<project_id>/members/<member_id>")
@user_required
def remove_member(project_id: str, member_id: str):
    model = ProjectModel()
    project, error = _project_for(model, project_id, MANAGER_ROLES)
    if error:
        return error
    project = model.remove_member(project, member_id)
    return jsonify({"ok": True, "project": map_project(project)})


@project_api_bp.put("/<project_id>/members/<member_id>")
@user_required
def update_member_role(project_id: str, member_id: str):
    data, error = _validate(MemberRoleUpdate)
    if error:
        return error
    model = ProjectModel()
    project, error = _project_for(model, project_id, ("owner",))
    if error:
        return error
    project = model.update_member_role(project, member_id, data.role)
    return jsonify({"ok": True, "project": map_project(project)})


def _set_status(project_id: str, status: str):
    model = ProjectModel()
    project, error = _project_for(model, project_id, MANAGER_ROLES)
    if error:
        return error
    project = model.set_status(project, status)
    return jsonify({"ok": True, "project": map_project(project)})


@project_api_bp.post("/<project_id>/archive")
@user_required
def archive_project(project_id: str):
    return _set_status(project_id, "archived")


@project_api_bp.post("/<project_id>/complete")
@user_required
def complete_project(project_id: str):
    return _set_status(project_id, "completed")


@project_api_bp.post("/<project_id>/reactivate")
@user_required
def reactivate_project(project_id: str):
    return _set_status(project_id, "active")


@project_api_bp.delete("/<project_id>")
@user_required
def delete_project(project_id: str):
    model = ProjectModel()
    project, error = _project_for(model, project_id, ("owner",))
    if error:
        return error
    model.delete_project(project)
    return jsonify({"ok": True})
