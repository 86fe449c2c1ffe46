"""Async MongoDB readiness probe for /ready."""

from typing import Any

from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from hybrid_rag.config.logging import get_logger
from hybrid_rag.resources.mongo.client import get_mongo_client

logger = get_logger(__name__)


async def ping_mongo() -> dict[str, Any]:
    """
    Ping MongoDB. Returns {"ok": bool, "error": str | None}; error is a short code,
    never the underlying exception text.
    """
    try:
        await get_mongo_client().admin.command("ping")
        return {"ok": True}
    except ServerSelectionTimeoutError as e:
        logger.warning("MongoDB ping timeout", extra={"error": type(e).__name__})
        return {"ok": False, "error": "connection_timeout"}
    except PyMongoError as e:
        logger.warning("MongoDB ping failed", extra={"error": type(e).__name__})
        return {"ok": False, "error": "connection_failed"}
