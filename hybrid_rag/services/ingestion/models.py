"""Ingestion result model."""

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    document_id: str
    chunk_count: int = Field(default=0, ge=0)
    indexed_count: int = Field(default=0, ge=0)
    replaced_count: int = Field(default=0, ge=0, description="Points of a previous version removed first")
    chunk_ids: list[str] = Field(default_factory=list)
    strategy: str
