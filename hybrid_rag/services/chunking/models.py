"""Chunk records produced by the chunking engine."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from hybrid_rag.config.chunking.models import ChunkStrategy

ChunkType = Literal["text", "code", "heading", "list"]


class Chunk(BaseModel):
    """
    One bounded passage of a document. Offsets point into the trimmed source text and are
    approximate once overlap or merging has touched the chunk.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    index: int = Field(..., ge=0)
    parent_heading: str | None = None
    heading_level: int | None = Field(default=None, ge=1, le=6)
    has_code: bool = False
    code_language: str | None = None
    start_offset: int = Field(default=0, ge=0)
    end_offset: int = Field(default=0, ge=0)
    chunk_type: ChunkType = "text"


class ChunkResult(BaseModel):
    """Output of one chunk() call."""

    model_config = ConfigDict(frozen=True)

    chunks: list[Chunk] = Field(default_factory=list)
    total_characters: int = Field(default=0, ge=0)
    chunk_count: int = Field(default=0, ge=0)
    strategy: ChunkStrategy = "hybrid"
