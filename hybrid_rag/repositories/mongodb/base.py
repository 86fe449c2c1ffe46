"""Shared async MongoDB access and common error handling."""

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from hybrid_rag.config.logging import get_logger
from hybrid_rag.resources.mongo.client import get_database

logger = get_logger(__name__)

RAW_DOCUMENTS_COLLECTION = "raw_documents"


class RepositoryError(Exception):
    """Raised when a repository operation fails after handling PyMongo errors."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


def _translate_pymongo_error(e: PyMongoError, context: str) -> RepositoryError:
    """Wrap PyMongo errors into a non-leaking RepositoryError."""
    logger.warning(
        "MongoDB operation failed",
        extra={"context": context, "error_type": type(e).__name__},
    )
    return RepositoryError(f"Dependency temporarily unavailable: {context}", cause=e)


def get_collection(name: str, db: AsyncIOMotorDatabase | None = None) -> AsyncIOMotorCollection:
    """Return the named collection from db, or from the configured database."""
    return (db if db is not None else get_database())[name]
