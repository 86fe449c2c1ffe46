"""Sentence chunking: greedy sentence packing across the whole document, ignoring structure."""

from hybrid_rag.config.chunking.models import ChunkConfig
from hybrid_rag.services.chunking.models import Chunk
from hybrid_rag.services.chunking.structure import OffsetTracker, pack_sentences, text_chunk


def sentence_chunks(text: str, config: ChunkConfig) -> list[Chunk]:
    tracker = OffsetTracker(text)
    return [
        text_chunk(piece, i, tracker, chunk_type="text")
        for i, piece in enumerate(pack_sentences(text, config.max_chunk_size))
    ]
