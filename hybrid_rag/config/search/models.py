"""Hybrid search configuration models. Read-only; no business logic."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HybridSearchOptions(BaseModel):
    """Per-call hybrid search options. Missing fields fall back to the defaults below."""

    model_config = ConfigDict(frozen=True)

    vector_weight: float = Field(default=0.7, ge=0.0, description="Weight of the vector ranking in RRF")
    keyword_weight: float = Field(default=0.3, ge=0.0, description="Weight of the keyword ranking in RRF")
    min_score: float = Field(default=0.1, ge=0.0, description="Fused results below this score are dropped")
    limit: int = Field(default=10, ge=1, description="Maximum results returned")
    filter: dict[str, Any] | None = Field(default=None, description="Equality filter applied to both searches")
    use_vector: bool = Field(default=True)
    use_keyword: bool = Field(default=True)
    rrf_k: int = Field(default=60, ge=0, description="RRF constant; larger values flatten rank differences")


class KeywordCollection(BaseModel):
    """A document collection searched by keyword, and how its fields map onto a result."""

    name: str = Field(..., min_length=1)
    id_field: str = Field(default="id")
    title_field: str = Field(default="title")
    content_field: str = Field(default="content")
    metadata_fields: list[str] = Field(default_factory=list)
