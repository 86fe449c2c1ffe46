"""Chunking configuration models. Read-only; no business logic."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ChunkStrategy = Literal["sentence", "paragraph", "heading", "hybrid"]


class ChunkConfig(BaseModel):
    """Chunking strategy and size limits, in characters. Immutable per call."""

    model_config = ConfigDict(frozen=True)

    max_chunk_size: int = Field(default=4000, ge=1, description="Maximum characters per chunk")
    min_chunk_size: int = Field(
        default=500, ge=0, description="Chunks below this are merged with their neighbours (0 disables)"
    )
    overlap_size: int = Field(default=200, ge=0, description="Characters carried over from the previous chunk")
    strategy: ChunkStrategy = Field(default="hybrid", description="sentence|paragraph|heading|hybrid")
    separate_code_blocks: bool = Field(default=True, description="Emit fenced code blocks as their own chunks")

    @model_validator(mode="after")
    def validate_size_bounds(self):
        """min_chunk_size must stay below max_chunk_size."""
        if self.min_chunk_size >= self.max_chunk_size:
            raise ValueError(
                f"min_chunk_size ({self.min_chunk_size}) must be less than max_chunk_size ({self.max_chunk_size})"
            )
        return self


DEFAULT_CHUNK_CONFIG = ChunkConfig()
