"""Document store client and collection access used across the application."""

from typing import Any

from loguru import logger
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from src.bookstore.runtime.config.config_data import DatabaseConfig
from src.bookstore.runtime.context import get_config


class DocumentStoreService:
    """Owns the MongoDB client for the lifetime of the application.

    Created at startup and closed at shutdown; request handlers reach the
    collections through this service instead of module-level state.
    """

    def __init__(
        self,
        db_config: DatabaseConfig | None = None,
        client: MongoClient | None = None,
    ):
        """Initialize the shared MongoDB client.

        Args:
            db_config: Database settings; defaults to the active configuration.
            client: Pre-built client, used instead of connecting with ``db_config.url``.
        """
        main_config = get_config()
        self._db_config = db_config or main_config.database

        if client is None:
            logger.info(
                "Configuring document store client for environment: {}",
                main_config.app.environment,
            )
            client = MongoClient(
                self._db_config.url,
                serverSelectionTimeoutMS=self._db_config.server_selection_timeout_ms,
                appname=self._db_config.app_name,
                tz_aware=True,
            )
        self._client = client
        logger.info(
            "Document store ready: database={} collection={}",
            self._db_config.name,
            self._db_config.books_collection,
        )

    @property
    def database(self) -> Database:
        return self._client[self._db_config.name]

    @property
    def books(self) -> Collection:
        """The collection holding book documents."""
        return self.database[self._db_config.books_collection]

    def health_check(self) -> bool:
        """Ping the server; False when it cannot be reached."""
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(
                "Document store health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def describe(self) -> dict[str, Any]:
        """Non-secret connection details for monitoring endpoints."""
        return {
            "type": "mongodb",
            "database": self._db_config.name,
            "collection": self._db_config.books_collection,
        }

    def close(self) -> None:
        logger.info("Closing document store client")
        self._client.close()
