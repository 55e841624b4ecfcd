"""LifeTracker application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from typing import Optional

from flask import Flask

from lifetracker.config import config_by_name
from lifetracker.core.auth.tokens import configure_token_validation, register_token_handlers
from lifetracker.core.errors import ApiError
from lifetracker.extensions import cosmos, init_extensions, jwt


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the LifeTracker Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()

    app = Flask(__name__)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    _configure_logging(app)
    configure_token_validation(app)
    init_extensions(app)
    register_token_handlers(jwt)
    _register_blueprints(app)
    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True, "database": cosmos.status()["mode"]}, 200

    # Register CLI commands
    from lifetracker.scripts.init_db import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("lifetracker").setLevel(level)
    # The Azure SDK logs every HTTP request at INFO.
    logging.getLogger("azure").setLevel(max(level, logging.WARNING))


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from lifetracker.domains.activities.controllers.activity_api import activity_api_bp
    from lifetracker.domains.analytics.controllers.analytics_api import analytics_api_bp
    from lifetracker.domains.fitness.controllers.fitness_api import fitness_api_bp
    from lifetracker.domains.goals.controllers.goal_api import goal_api_bp
    from lifetracker.domains.habits.controllers.habit_api import habit_api_bp
    from lifetracker.domains.insights.controllers.openai_api import openai_api_bp
    from lifetracker.domains.journal.controllers.journal_api import journal_api_bp
    from lifetracker.domains.projects.controllers.project_api import project_api_bp
    from lifetracker.domains.tasks.controllers.task_api import task_api_bp
    from lifetracker.domains.users.controllers.user_api import user_api_bp

    app.register_blueprint(user_api_bp, url_prefix="/api/users")
    app.register_blueprint(fitness_api_bp, url_prefix="/api/fitness")
    app.register_blueprint(task_api_bp, url_prefix="/api/tasks")
    app.register_blueprint(project_api_bp, url_prefix="/api/projects")
    app.register_blueprint(goal_api_bp, url_prefix="/api/goals")
    app.register_blueprint(activity_api_bp, url_prefix="/api/activities")
    app.register_blueprint(habit_api_bp, url_prefix="/api/habits")
    app.register_blueprint(journal_api_bp, url_prefix="/api/journals")
    app.register_blueprint(analytics_api_bp, url_prefix="/api/analytics")
    app.register_blueprint(openai_api_bp, url_prefix="/api/openai")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(ApiError)
    def _api_error(exc: ApiError):
        if exc.status >= 500:
            app.logger.error("API error: %s", exc.message)
        return exc.to_dict(), exc.status

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500
