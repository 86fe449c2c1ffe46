"""Chunking strategy implementations. Each maps (trimmed text, config) to ordered chunks."""

from typing import Callable

from hybrid_rag.config.chunking.models import ChunkConfig
from hybrid_rag.services.chunking.models import Chunk
from hybrid_rag.services.chunking.strategies.heading import heading_chunks
from hybrid_rag.services.chunking.strategies.hybrid import hybrid_chunks
from hybrid_rag.services.chunking.strategies.paragraph import paragraph_chunks
from hybrid_rag.services.chunking.strategies.sentence import sentence_chunks

STRATEGY_REGISTRY: dict[str, Callable[[str, ChunkConfig], list[Chunk]]] = {
    "hybrid": hybrid_chunks,
    "heading": heading_chunks,
    "paragraph": paragraph_chunks,
    "sentence": sentence_chunks,
}


def get_strategy_fn(strategy_name: str):
    """Return the chunking function for the given strategy name, or None."""
    return STRATEGY_REGISTRY.get(strategy_name)
