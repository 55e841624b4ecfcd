"""Application configuration for LifeTracker."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Dict, Type

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Cosmos DB
    COSMOS_DB_ENDPOINT = os.environ.get("COSMOS_DB_ENDPOINT", "")
    COSMOS_DB_KEY = os.environ.get("COSMOS_DB_KEY", "")
    COSMOS_DB_DATABASE = os.environ.get("COSMOS_DB_DATABASE", "lifetrackpro-db")
    # None means "decide from credentials"; an explicit true/false wins.
    USE_MOCK_DATABASE = (
        _env_flag("USE_MOCK_DATABASE") if "USE_MOCK_DATABASE" in os.environ else None
    )
    COSMOS_DB_REQUEST_TIMEOUT = int(os.environ.get("COSMOS_DB_REQUEST_TIMEOUT", "10"))

    # Accepted for deployment parity; secrets are read from the environment.
    USE_KEY_VAULT = _env_flag("USE_KEY_VAULT")
    AZURE_KEY_VAULT_URL = os.environ.get("AZURE_KEY_VAULT_URL", "")

    # Bearer tokens. With AZURE_AUTHORITY set, keys come from the Azure AD JWKS.
    AZURE_CLIENT_ID = os.environ.get("AZURE_CLIENT_ID", "")
    AZURE_AUTHORITY = os.environ.get("AZURE_AUTHORITY", "").rstrip("/")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.environ.get("JWT_ACCESS_MINUTES", "60")))
    MOCK_AUTH = _env_flag("MOCK_AUTH")
    DEV_USER_ID = os.environ.get("DEV_USER_ID", "dev-user-123")

    RATELIMIT_DEFAULT = "200/hour"
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = _env_flag("RATELIMIT_ENABLED", "true")

    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))

    # OpenAI summaries
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
    AZURE_OPENAI_ENDPOINT = os.environ.get("AZURE_OPENAI_ENDPOINT", "")
    AZURE_OPENAI_API_KEY = os.environ.get("AZURE_OPENAI_API_KEY", "")
    AZURE_OPENAI_API_VERSION = os.environ.get("AZURE_OPENAI_API_VERSION", "2024-02-15-preview")
    OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")
    MOCK_OPENAI = _env_flag("MOCK_OPENAI")

    # Sentiment scoring for journal entries
    TEXT_ANALYTICS_ENDPOINT = os.environ.get("TEXT_ANALYTICS_ENDPOINT", "").rstrip("/")
    TEXT_ANALYTICS_KEY = os.environ.get("TEXT_ANALYTICS_KEY", "")
    TEXT_ANALYTICS_TIMEOUT_SECONDS = int(os.environ.get("TEXT_ANALYTICS_TIMEOUT_SECONDS", "10"))
    ENABLE_ADVANCED_INSIGHTS = _env_flag("ENABLE_ADVANCED_INSIGHTS", "true")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"
    MOCK_AUTH = _env_flag("MOCK_AUTH", "true")


class TestingConfig(BaseConfig):
    TESTING = True
    ENV = "testing"
    USE_MOCK_DATABASE = True
    RATELIMIT_ENABLED = False
    JWT_SECRET_KEY = "testing-secret-key-with-enough-length"
    AZURE_AUTHORITY = ""
    MOCK_AUTH = False
    MOCK_OPENAI = True
    TEXT_ANALYTICS_ENDPOINT = ""
    TEXT_ANALYTICS_KEY = ""


class ProductionConfig(BaseConfig):
    ENV = "production"
    MOCK_AUTH = False


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
