"""Request/response schemas for POST /search."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from hybrid_rag.services.search.models import HybridSearchResult, SearchStats

SearchMode = Literal["hybrid", "vector", "keyword"]


class SearchRequest(BaseModel):
    """
    POST /search request body. Option fields left unset fall back to the search profile.
    vector and keyword modes use only limit and filter.
    """

    query: str = Field(..., min_length=1)
    mode: SearchMode = Field(default="hybrid")
    profile: str | None = Field(default=None, description="Search profile; defaults to the service's profile")
    limit: int | None = Field(default=None, ge=1, le=100)
    filter: dict[str, Any] | None = None
    vector_weight: float | None = Field(default=None, ge=0.0)
    keyword_weight: float | None = Field(default=None, ge=0.0)
    min_score: float | None = Field(default=None, ge=0.0)
    rrf_k: int | None = Field(default=None, ge=0)
    use_vector: bool | None = None
    use_keyword: bool | None = None


class SearchResponse(BaseModel):
    """All modes answer in the fused shape; single-mode hits carry only their own score."""

    mode: SearchMode
    query: str
    results: list[HybridSearchResult] = Field(default_factory=list)
    stats: SearchStats
