"""
Hybrid retrieval: vector similarity and keyword search for the same query, run concurrently
and fused with weighted RRF. Either path failing degrades to an empty sub-result; search()
itself does not raise for collaborator failures.
"""

import asyncio
import time
from typing import Any

from hybrid_rag.config.logging import get_logger
from hybrid_rag.config.search.models import HybridSearchOptions
from hybrid_rag.services.embedder.adapter import EmbeddingAdapter
from hybrid_rag.services.embedder.base import EmbeddingUnavailableError
from hybrid_rag.services.search.base import BaseVectorStore
from hybrid_rag.services.search.fusion import reciprocal_rank_fusion
from hybrid_rag.services.search.keyword_search import KeywordSearch
from hybrid_rag.services.search.models import (
    HybridSearchResponse,
    KeywordResult,
    SearchResult,
    SearchStats,
)

logger = get_logger(__name__)

MAX_FETCH_SIZE = 50


def fetch_size_for(limit: int) -> int:
    """Each path over-fetches so fusion has more to rank than the final limit."""
    return min(limit * 3, MAX_FETCH_SIZE)


class HybridSearchService:
    def __init__(
        self,
        vector_store: BaseVectorStore,
        keyword_search: KeywordSearch,
        embedder: EmbeddingAdapter | None = None,
    ) -> None:
        self._vector_store = vector_store
        self._keyword_search = keyword_search
        self._embedder = embedder

    def is_available(self) -> bool:
        """True when an embedder is configured and reports itself usable."""
        return self._embedder is not None and self._embedder.is_available()

    async def _vector_path(self, query: str, fetch_size: int, options: HybridSearchOptions) -> list[SearchResult]:
        if not options.use_vector or not self.is_available():
            return []
        try:
            vector = await self._embedder.embed(query)
            return await self._vector_store.search(vector, fetch_size, options.filter)
        except Exception:
            logger.exception("Vector search failed", extra={"fetch_size": fetch_size})
            return []

    async def _keyword_path(self, query: str, fetch_size: int, options: HybridSearchOptions) -> list[KeywordResult]:
        if not options.use_keyword:
            return []
        try:
            return await self._keyword_search.search(query, fetch_size, options.filter)
        except Exception:
            logger.exception("Keyword search failed", extra={"fetch_size": fetch_size})
            return []

    async def search(self, query: str, options: HybridSearchOptions | None = None) -> HybridSearchResponse:
        """
        Run both paths concurrently, fuse, drop results under options.min_score, and truncate
        to options.limit. Stats report per-path counts and wall-clock time.
        """
        opts = options or HybridSearchOptions()
        started = time.perf_counter()
        fetch_size = fetch_size_for(opts.limit)

        vector_results, keyword_results = await asyncio.gather(
            self._vector_path(query, fetch_size, opts),
            self._keyword_path(query, fetch_size, opts),
        )

        fused = reciprocal_rank_fusion(
            vector_results,
            keyword_results,
            vector_weight=opts.vector_weight,
            keyword_weight=opts.keyword_weight,
            rrf_k=opts.rrf_k,
        )
        results = [r for r in fused if r.score >= opts.min_score][: opts.limit]
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "Hybrid search completed",
            extra={
                "vector_results": len(vector_results),
                "keyword_results": len(keyword_results),
                "returned": len(results),
                "search_time_ms": round(elapsed_ms, 2),
            },
        )
        return HybridSearchResponse(
            results=results,
            query=query,
            stats=SearchStats(
                vector_result_count=len(vector_results),
                keyword_result_count=len(keyword_results),
                combined_result_count=len(results),
                search_time_ms=elapsed_ms,
            ),
        )

    async def vector_search(
        self, query: str, limit: int = 10, filter: dict[str, Any] | None = None
    ) -> list[SearchResult]:
        """Vector-only search. Raises EmbeddingUnavailableError when no usable embedder is configured."""
        if not self.is_available():
            raise EmbeddingUnavailableError("Embedding service not available")
        vector = await self._embedder.embed(query)
        return await self._vector_store.search(vector, limit, filter)

    async def keyword_search_only(
        self, query: str, limit: int = 10, filter: dict[str, Any] | None = None
    ) -> list[KeywordResult]:
        return await self._keyword_search.search(query, limit, filter)
