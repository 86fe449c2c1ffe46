"""Async OpenSearch client with connection pooling, timeouts, and graceful shutdown."""

from opensearchpy import AsyncOpenSearch

from hybrid_rag.config.logging import get_logger
from hybrid_rag.config.settings import get_settings

logger = get_logger(__name__)

_client: AsyncOpenSearch | None = None


def get_opensearch_client() -> AsyncOpenSearch:
    """Return the shared async OpenSearch client. Creates it on first use."""
    global _client
    if _client is None:
        s = get_settings()
        _client = AsyncOpenSearch(
            hosts=[s.opensearch_host],
            http_auth=(s.opensearch_username, s.opensearch_password),
            use_ssl=s.opensearch_use_ssl,
            verify_certs=s.opensearch_verify_certs,
            timeout=s.opensearch_timeout,
        )
        logger.info(
            "OpenSearch async client initialized",
            extra={"host": s.opensearch_host, "timeout": s.opensearch_timeout},
        )
    return _client


async def close_opensearch_client() -> None:
    """Close the OpenSearch client and release connections. Call on app shutdown."""
    global _client
    if _client is not None:
        try:
            await _client.close()
            logger.info("OpenSearch async client closed")
        except Exception as e:
            logger.warning("Error closing OpenSearch client", extra={"error": str(e)})
        _client = None
