"""
Async OpenSearch k-NN vector store for chunk points.
Idempotent: the point id is the document _id, so re-indexing replaces rather than duplicates.
"""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import NotFoundError, OpenSearchException
from opensearchpy.helpers import async_bulk

from hybrid_rag.config.indexing.models import IndexingConfig
from hybrid_rag.config.logging import get_logger
from hybrid_rag.resources.opensearch.client import get_opensearch_client
from hybrid_rag.resources.opensearch.index_manager import VECTOR_FIELD_NAME, create_index_if_not_exists
from hybrid_rag.services.search.base import BaseVectorStore, VectorStoreError
from hybrid_rag.services.search.models import SearchResult

logger = get_logger(__name__)


def filter_to_clauses(filter: dict[str, Any] | None) -> list[dict[str, Any]]:
    """Translate {field: value | [values]} into term/terms clauses. None values are skipped."""
    clauses: list[dict[str, Any]] = []
    for field, value in (filter or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set)):
            clauses.append({"terms": {field: list(value)}})
        else:
            clauses.append({"term": {field: value}})
    return clauses


def cosine_from_score(score: float) -> float:
    """OpenSearch reports cosinesimil hits as (1 + cos) / 2; map back to cosine similarity."""
    return 2.0 * score - 1.0


class OpenSearchVectorStore(BaseVectorStore):
    def __init__(
        self,
        index_name: str,
        dimension: int,
        indexing_config: IndexingConfig,
        client: AsyncOpenSearch | None = None,
    ) -> None:
        self._index_name = index_name
        self._dimension = dimension
        self._config = indexing_config
        self._client = client
        self._ready = False

    @property
    def index_name(self) -> str:
        return self._index_name

    @property
    def client(self) -> AsyncOpenSearch:
        return self._client if self._client is not None else get_opensearch_client()

    def _to_similarity(self, score: float) -> float:
        if self._config.similarity == "cosine":
            return cosine_from_score(score)
        return score

    async def ensure_collection(self) -> None:
        if self._ready:
            return
        await create_index_if_not_exists(self.client, self._index_name, self._dimension, self._config)
        self._ready = True

    async def upsert(self, points: list[dict[str, Any]]) -> int:
        """
        Bulk-write points shaped {id, vector, payload}. Every vector must match the index dimension.
        Raises VectorStoreError if any point is rejected.
        """
        if not points:
            return 0
        actions: list[dict[str, Any]] = []
        for point in points:
            vector = point["vector"]
            if len(vector) != self._dimension:
                raise VectorStoreError(
                    f"Point {point['id']!r} has dimension {len(vector)}, expected {self._dimension}"
                )
            actions.append(
                {
                    "_op_type": "index",
                    "_index": self._index_name,
                    "_id": point["id"],
                    "_source": {**point.get("payload", {}), VECTOR_FIELD_NAME: vector},
                }
            )

        await self.ensure_collection()
        try:
            success, failed = await async_bulk(
                self.client,
                actions,
                raise_on_error=False,
                raise_on_exception=False,
                refresh="wait_for",
            )
        except OpenSearchException as e:
            logger.exception("Bulk index failed", extra={"index_name": self._index_name})
            raise VectorStoreError(f"Bulk index into '{self._index_name}' failed") from e

        if failed:
            first = failed[0].get("index", {}) if isinstance(failed[0], dict) else {}
            logger.warning(
                "Bulk index had failures",
                extra={
                    "index_name": self._index_name,
                    "success": success,
                    "failed_count": len(failed),
                    "first_error": str(first.get("error", "unknown")),
                },
            )
            raise VectorStoreError(f"{len(failed)} of {len(points)} points were rejected by '{self._index_name}'")

        logger.info("Points upserted", extra={"index_name": self._index_name, "count": success})
        return success

    async def search(
        self, vector: list[float], k: int, filter: dict[str, Any] | None = None
    ) -> list[SearchResult]:
        if k <= 0:
            return []
        await self.ensure_collection()

        knn: dict[str, Any] = {"vector": vector, "k": k}
        clauses = filter_to_clauses(filter)
        if clauses:
            knn["filter"] = {"bool": {"filter": clauses}}
        if self._config.hnsw_config.ef_search is not None:
            knn["method_parameters"] = {"ef_search": self._config.hnsw_config.ef_search}
        body: dict[str, Any] = {
            "size": k,
            "_source": {"excludes": [VECTOR_FIELD_NAME]},
            "query": {"knn": {VECTOR_FIELD_NAME: knn}},
        }

        try:
            resp = await self.client.search(index=self._index_name, body=body)
        except OpenSearchException as e:
            logger.warning(
                "Vector search failed",
                extra={"index_name": self._index_name, "error_type": type(e).__name__},
            )
            raise VectorStoreError(f"Vector search on '{self._index_name}' failed") from e

        results: list[SearchResult] = []
        for hit in resp.get("hits", {}).get("hits", []):
            source = dict(hit.get("_source") or {})
            content = source.pop("content", "")
            results.append(
                SearchResult(
                    id=str(hit["_id"]),
                    score=self._to_similarity(float(hit.get("_score") or 0.0)),
                    content=content,
                    metadata=source,
                )
            )
        return results

    async def delete_by_filter(self, filter: dict[str, Any]) -> int:
        """Delete matching points. An empty filter is rejected rather than clearing the index."""
        clauses = filter_to_clauses(filter)
        if not clauses:
            raise ValueError("delete_by_filter requires a non-empty filter")
        try:
            resp = await self.client.delete_by_query(
                index=self._index_name,
                body={"query": {"bool": {"filter": clauses}}},
                params={"refresh": "true", "conflicts": "proceed"},
            )
        except NotFoundError:
            return 0
        except OpenSearchException as e:
            logger.warning(
                "Delete by filter failed",
                extra={"index_name": self._index_name, "error_type": type(e).__name__},
            )
            raise VectorStoreError(f"Delete on '{self._index_name}' failed") from e
        deleted = int(resp.get("deleted", 0))
        logger.info("Points deleted", extra={"index_name": self._index_name, "deleted": deleted})
        return deleted
