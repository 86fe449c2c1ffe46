"""Async MongoDB client with connection pooling, timeouts, and graceful shutdown using Motor."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from hybrid_rag.config.logging import get_logger
from hybrid_rag.config.settings import get_settings

logger = get_logger(__name__)

_client: AsyncIOMotorClient | None = None
_default_db: AsyncIOMotorDatabase | None = None


def get_mongo_client() -> AsyncIOMotorClient:
    """Return the shared async MongoDB client. Creates it on first use."""
    global _client
    if _client is None:
        s = get_settings()
        _client = AsyncIOMotorClient(
            s.mongo_uri,
            connectTimeoutMS=s.mongo_connect_timeout_ms,
            serverSelectionTimeoutMS=s.mongo_server_selection_timeout_ms,
            maxPoolSize=s.mongo_max_pool_size,
        )
        logger.info(
            "MongoDB async client initialized",
            extra={"database": s.mongo_database, "max_pool_size": s.mongo_max_pool_size},
        )
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """Return the configured database on the shared client."""
    global _default_db
    if _default_db is None:
        _default_db = get_mongo_client()[get_settings().mongo_database]
    return _default_db


def close_mongo_client() -> None:
    """Close the MongoDB client and release connections. Call on app shutdown."""
    global _client, _default_db
    if _client is not None:
        try:
            _client.close()
            logger.info("MongoDB async client closed")
        except Exception as e:
            logger.warning("Error closing MongoDB client", extra={"error": str(e)})
        _client = None
        _default_db = None
