"""Async OpenSearch readiness probe for /ready."""

from typing import Any

from opensearchpy.exceptions import ConnectionError as OSConnectionError
from opensearchpy.exceptions import ConnectionTimeout as OSConnectionTimeout
from opensearchpy.exceptions import OpenSearchException

from hybrid_rag.config.logging import get_logger
from hybrid_rag.resources.opensearch.client import get_opensearch_client

logger = get_logger(__name__)


async def ping_opensearch() -> dict[str, Any]:
    """
    Ping OpenSearch. Returns {"ok": bool, "error": str | None}; error is a short code,
    never the underlying exception text.
    """
    try:
        if await get_opensearch_client().ping():
            return {"ok": True}
        return {"ok": False, "error": "ping_rejected"}
    except OSConnectionTimeout as e:
        logger.warning("OpenSearch ping timeout", extra={"error": type(e).__name__})
        return {"ok": False, "error": "connection_timeout"}
    except (OSConnectionError, OpenSearchException) as e:
        logger.warning("OpenSearch ping failed", extra={"error": type(e).__name__})
        return {"ok": False, "error": "connection_failed"}
