"""Cosmos DB access with an in-memory fallback.

``CosmosStore`` decides once per app whether documents go to Azure Cosmos DB or
to :mod:`lifetracker.datastore.mock`, then hands out containers lazily. A
container that fails to initialise against the hosted database is replaced by a
mock container for the rest of the process.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from azure.core.exceptions import AzureError
from azure.cosmos import CosmosClient, PartitionKey
from flask import current_app

from lifetracker.datastore.mock import MockDatabase

logger = logging.getLogger(__name__)

PARTITION_KEY_PATH = "/userId"
DEFAULT_DATABASE_ID = "lifetrackpro-db"

# Logical resource name -> default container id
CONTAINER_NAMES = (
    "users",
    "fitness",
    "tasks",
    "development",
    "analytics",
    "files",
    "goals",
    "activities",
    "habits",
    "journals",
    "projects",
)


class CosmosStore:
    """Flask extension owning the Cosmos client and its containers."""

    def __init__(self, app=None) -> None:
        self.use_mock = True
        self.database_id = DEFAULT_DATABASE_ID
        self.container_ids: Dict[str, str] = {name: name for name in CONTAINER_NAMES}
        self._endpoint = ""
        self._key = ""
        self._timeout = 10
        self._client: Optional[CosmosClient] = None
        self._database = None
        self._mock_database: Optional[MockDatabase] = None
        self._containers: Dict[str, Any] = {}
        self._fallbacks: set[str] = set()
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        config = app.config
        self.database_id = config.get("COSMOS_DB_DATABASE") or DEFAULT_DATABASE_ID
        self.container_ids = {
            name: config.get(f"COSMOS_DB_{name.upper()}_CONTAINER") or name
            for name in CONTAINER_NAMES
        }
        self._endpoint = config.get("COSMOS_DB_ENDPOINT") or ""
        self._key = config.get("COSMOS_DB_KEY") or ""
        self._timeout = int(config.get("COSMOS_DB_REQUEST_TIMEOUT", 10))
        self.use_mock = self._should_use_mock(config)
        self.reset()
        app.extensions["cosmos"] = self
        logger.info(
            "Document store: %s (database=%s)",
            "mock" if self.use_mock else "cosmos",
            self.database_id,
        )

    def _should_use_mock(self, config) -> bool:
        if config.get("TESTING"):
            return True
        explicit = config.get("USE_MOCK_DATABASE")
        if explicit is True:
            return True
        if not (self._endpoint and self._key):
            if explicit is False:
                logger.warning("USE_MOCK_DATABASE=false but Cosmos DB credentials are missing; using mock database")
            return True
        return False

    def reset(self) -> None:
        """Drop cached containers and all mock data."""
        self._client = None
        self._database = None
        self._mock_database = MockDatabase(self.database_id)
        self._containers = {}
        self._fallbacks = set()

    def initialize_cosmos_db(self) -> Dict[str, Any]:
        """Create the database and one container per resource; idempotent."""
        for name in CONTAINER_NAMES:
            self.get_container(name)
        return dict(self._containers)

    def get_container(self, name: str):
        if name not in self.container_ids:
            raise KeyError(f"Unknown container: {name}")
        container = self._containers.get(name)
        if container is None:
            container = self._open_container(name)
            self._containers[name] = container
        return container

    def is_mock(self, name: str) -> bool:
        return self.use_mock or name in self._fallbacks

    def status(self) -> Dict[str, Any]:
        return {
            "mode": "mock" if self.use_mock else "cosmos",
            "database": self.database_id,
            "containers": {
                name: ("mock" if self.is_mock(name) else "cosmos") for name in self._containers
            },
        }

    def _open_container(self, name: str):
        container_id = self.container_ids[name]
        partition_key = PartitionKey(path=PARTITION_KEY_PATH)
        if not self.use_mock:
            try:
                database = self._hosted_database()
                container = database.create_container_if_not_exists(id=container_id, partition_key=partition_key)
                logger.info("Container '%s' ready", container_id)
                return container
            except (AzureError, ValueError):
                logger.exception("Failed to initialise container '%s'; falling back to mock container", container_id)
                self._fallbacks.add(name)
        return self._mock_database.create_container_if_not_exists(id=container_id, partition_key=partition_key)

    def _hosted_database(self):
        if self._database is None:
            if self._client is None:
                self._client = CosmosClient(
                    url=self._endpoint,
                    credential=self._key,
                    connection_timeout=self._timeout,
                )
            self._database = self._client.create_database_if_not_exists(id=self.database_id)
            logger.info("Database '%s' ready", self.database_id)
        return self._database


def _store() -> CosmosStore:
    return current_app.extensions["cosmos"]


def get_container(name: str):
    """Return the container for a logical resource on the current app."""
    return _store().get_container(name)


def initialize_cosmos_db() -> Dict[str, Any]:
    return _store().initialize_cosmos_db()
