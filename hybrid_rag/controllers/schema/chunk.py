"""Request schema for POST /chunk. The response is the chunker's ChunkResult."""

from pydantic import BaseModel, Field

from hybrid_rag.config.chunking.models import ChunkStrategy


class ChunkOverrides(BaseModel):
    """Per-request overrides applied on top of a chunking profile. Unset fields keep the profile value."""

    max_chunk_size: int | None = Field(default=None, ge=1, le=100_000)
    min_chunk_size: int | None = Field(default=None, ge=0, le=100_000)
    overlap_size: int | None = Field(default=None, ge=0, le=10_000)
    strategy: ChunkStrategy | None = None
    separate_code_blocks: bool | None = None


class ChunkRequest(ChunkOverrides):
    """POST /chunk request body: text to chunk, a profile from config/chunking/static.json, and overrides."""

    text: str = Field(..., description="Document text (markdown or plain)")
    profile: str = Field(default="active", description="Chunking profile name; 'active' uses the configured one")
