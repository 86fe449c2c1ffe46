"""
Chunker: turns a raw document into ordered, boundedly sized chunks.
Pure and stateless: no I/O, safe to call concurrently. Pipeline per call:
trim → strategy → overlap → merge small chunks → reindex.
"""

import hashlib
import json
from typing import Any

from hybrid_rag.config.chunking.models import DEFAULT_CHUNK_CONFIG, ChunkConfig
from hybrid_rag.config.logging import get_logger
from hybrid_rag.services.chunking.models import ChunkResult
from hybrid_rag.services.chunking.postprocess import add_overlap, merge_small_chunks, reindex
from hybrid_rag.services.chunking.strategies import get_strategy_fn

logger = get_logger(__name__)

_RECOMMENDED_CHUNK_SIZES = {
    "text-embedding-3-large": 6000,
}
_DEFAULT_RECOMMENDED_CHUNK_SIZE = 4000


def chunk(text: str, config: ChunkConfig | None = None) -> ChunkResult:
    """
    Chunk a document. Empty or whitespace-only input yields an empty result, never an error.
    Offsets in the result are relative to the trimmed input.
    """
    config = config or DEFAULT_CHUNK_CONFIG
    if not text or not text.strip():
        return ChunkResult(chunks=[], total_characters=0, chunk_count=0, strategy=config.strategy)

    trimmed = text.strip()
    strategy_fn = get_strategy_fn(config.strategy)
    if strategy_fn is None:
        raise ValueError(f"Unknown chunking strategy: {config.strategy!r}")

    chunks = strategy_fn(trimmed, config)
    if config.overlap_size > 0 and len(chunks) > 1:
        chunks = add_overlap(chunks, config.overlap_size)
    chunks = merge_small_chunks(chunks, config.min_chunk_size, config.max_chunk_size)
    chunks = reindex(chunks)

    logger.debug(
        "Document chunked",
        extra={"strategy": config.strategy, "total_characters": len(trimmed), "chunk_count": len(chunks)},
    )
    return ChunkResult(
        chunks=chunks,
        total_characters=len(trimmed),
        chunk_count=len(chunks),
        strategy=config.strategy,
    )


def semantic_chunk(text: str, **overrides: Any) -> ChunkResult:
    """Chunk with the default config, overriding individual fields (e.g. max_chunk_size=1000)."""
    config = ChunkConfig.model_validate({**DEFAULT_CHUNK_CONFIG.model_dump(), **overrides})
    return chunk(text, config)


def get_recommended_chunk_size(model: str = "text-embedding-3-small") -> int:
    """Recommended max characters per chunk for an embedding model. Smaller chunks retrieve more precisely."""
    return _RECOMMENDED_CHUNK_SIZES.get(model, _DEFAULT_RECOMMENDED_CHUNK_SIZE)


def compute_chunk_hash(chunk_text: str, config: ChunkConfig) -> str:
    """Chunk hash = SHA-256(chunk_text + canonical config). Same text under the same config → same hash."""
    config_canonical = json.dumps(config.model_dump(mode="json"), sort_keys=True)
    payload = f"{chunk_text}|{config_canonical}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
