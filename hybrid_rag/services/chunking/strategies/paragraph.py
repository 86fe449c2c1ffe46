"""Paragraph chunking: greedy packing of whole paragraphs, no heading awareness."""

from hybrid_rag.config.chunking.models import ChunkConfig
from hybrid_rag.services.chunking.models import Chunk
from hybrid_rag.services.chunking.structure import OffsetTracker, pack_paragraphs, split_paragraphs, text_chunk


def paragraph_chunks(text: str, config: ChunkConfig) -> list[Chunk]:
    tracker = OffsetTracker(text)
    return [
        text_chunk(piece, i, tracker)
        for i, piece in enumerate(pack_paragraphs(split_paragraphs(text), config.max_chunk_size))
    ]
