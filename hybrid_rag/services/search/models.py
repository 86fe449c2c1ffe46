"""Result records for vector, keyword and fused (hybrid) search."""

from typing import Any, Literal

from pydantic import BaseModel, Field

ResultSource = Literal["vector", "keyword", "both"]


class SearchResult(BaseModel):
    """One vector search hit. score is cosine similarity (higher is better)."""

    id: str
    score: float
    content: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class KeywordResult(BaseModel):
    """One keyword search hit. rank is the heuristic keyword score (higher is better)."""

    id: str
    content: str = ""
    rank: float = 0.0
    metadata: dict[str, Any] = Field(default_factory=dict)


class HybridSearchResult(BaseModel):
    """A document after rank fusion, keyed by id across both sub-searches."""

    id: str
    content: str = ""
    score: float
    vector_score: float | None = None
    keyword_score: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    source: ResultSource


class SearchStats(BaseModel):
    vector_result_count: int = Field(default=0, ge=0)
    keyword_result_count: int = Field(default=0, ge=0)
    combined_result_count: int = Field(default=0, ge=0)
    search_time_ms: float = Field(default=0.0, ge=0.0)


class HybridSearchResponse(BaseModel):
    results: list[HybridSearchResult] = Field(default_factory=list)
    query: str
    stats: SearchStats = Field(default_factory=SearchStats)
