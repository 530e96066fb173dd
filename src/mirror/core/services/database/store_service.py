"""Document store connection service shared across the application."""

from loguru import logger

from src.mirror.core.storage.document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    MongoDocumentStore,
)
from src.mirror.runtime.config.config_data import DatabaseConfig
from src.mirror.runtime.context import get_config

USERS_COLLECTION = "users"
POSTS_COLLECTION = "posts"
COMMENTS_COLLECTION = "comments"


class DocumentStoreService:
    """Owns the database client and the three collection handles.

    Built once at startup and held for the life of the process; the client is
    only closed on shutdown.
    """

    def __init__(self, db_config: DatabaseConfig | None = None):
        db_config = db_config or get_config().database
        self._client = None
        self.backend = db_config.backend

        if db_config.backend == "memory":
            logger.info("Using in-memory document store")
            self.users: DocumentStore = InMemoryDocumentStore(USERS_COLLECTION)
            self.posts: DocumentStore = InMemoryDocumentStore(POSTS_COLLECTION)
            self.comments: DocumentStore = InMemoryDocumentStore(COMMENTS_COLLECTION)
            return

        from motor.motor_asyncio import AsyncIOMotorClient

        logger.info(
            "Initializing MongoDB client with connection string: {}",
            db_config.sanitized_connection_string,
        )
        self._client = AsyncIOMotorClient(
            db_config.connection_string,
            serverSelectionTimeoutMS=db_config.server_selection_timeout_ms,
        )
        database = self._client[db_config.app_db]
        self.users = MongoDocumentStore(database[USERS_COLLECTION])
        self.posts = MongoDocumentStore(database[POSTS_COLLECTION])
        self.comments = MongoDocumentStore(database[COMMENTS_COLLECTION])
        logger.info("MongoDB client initialized for database '{}'", db_config.app_db)

    async def health_check(self) -> bool:
        """Perform a health check on the store connection."""
        return await self.users.ping()

    def close(self) -> None:
        """Close the database client and clean up resources."""
        if self._client is not None:
            logger.info("Closing MongoDB connection")
            self._client.close()
            self._client = None
