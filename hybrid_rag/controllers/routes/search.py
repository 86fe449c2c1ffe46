"""POST /search: hybrid (default), vector-only or keyword-only retrieval."""

import time

from fastapi import APIRouter, Depends, HTTPException

from hybrid_rag.config.profiles import apply_overrides
from hybrid_rag.config.search.static import resolve_search_options
from hybrid_rag.controllers.dependencies import get_services
from hybrid_rag.controllers.schema.search import SearchRequest, SearchResponse
from hybrid_rag.services.container import Services
from hybrid_rag.services.embedder.base import EmbeddingUnavailableError
from hybrid_rag.services.search.models import HybridSearchResult, SearchStats

router = APIRouter(prefix="/search", tags=["search"])

OPTION_FIELDS = {
    "limit",
    "filter",
    "vector_weight",
    "keyword_weight",
    "min_score",
    "rrf_k",
    "use_vector",
    "use_keyword",
}


@router.post("", response_model=SearchResponse)
async def search(body: SearchRequest, services: Services = Depends(get_services)) -> SearchResponse:
    """
    Hybrid mode never fails for a missing collaborator; it degrades and reports zero counts.
    Vector mode without an embedder returns 503.
    """
    overrides = body.model_dump(include=OPTION_FIELDS)
    try:
        if body.profile:
            options = resolve_search_options(body.profile, overrides)
        else:
            options = apply_overrides(services.search_options, overrides)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if body.mode == "hybrid":
        response = await services.search.search(body.query, options)
        return SearchResponse(mode="hybrid", query=body.query, results=response.results, stats=response.stats)

    started = time.perf_counter()
    if body.mode == "vector":
        try:
            hits = await services.search.vector_search(body.query, options.limit, options.filter)
        except EmbeddingUnavailableError as e:
            raise HTTPException(status_code=503, detail="Embedding service not available") from e
        results = [
            HybridSearchResult(
                id=h.id, content=h.content, score=h.score, vector_score=h.score, metadata=h.metadata, source="vector"
            )
            for h in hits
        ]
        stats = SearchStats(vector_result_count=len(hits), combined_result_count=len(results))
    else:
        hits = await services.search.keyword_search_only(body.query, options.limit, options.filter)
        results = [
            HybridSearchResult(
                id=h.id, content=h.content, score=h.rank, keyword_score=h.rank, metadata=h.metadata, source="keyword"
            )
            for h in hits
        ]
        stats = SearchStats(keyword_result_count=len(hits), combined_result_count=len(results))

    stats = stats.model_copy(update={"search_time_ms": (time.perf_counter() - started) * 1000})
    return SearchResponse(mode=body.mode, query=body.query, results=results, stats=stats)
