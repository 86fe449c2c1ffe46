"""Vector index configuration models. Read-only; no business logic."""

from typing import Any

from pydantic import BaseModel, Field


class HNSWConfig(BaseModel):
    """HNSW tuning parameters."""

    m: int = Field(default=16, ge=1)
    ef_construction: int = Field(default=200, ge=1)
    ef_search: int | None = Field(default=None, ge=1)


class IndexingConfig(BaseModel):
    """k-NN index similarity and parameters."""

    similarity: str = Field(default="cosine", description="cosine|l2|dot_product")
    hnsw_config: HNSWConfig = Field(default_factory=HNSWConfig)
    index_settings: dict[str, Any] = Field(
        default_factory=lambda: {"number_of_shards": 1, "number_of_replicas": 1}
    )
