"""
Hybrid chunking: the structure-aware default for markdown-like documents.
Code fences are lifted out first, then text is split by headings, then by paragraphs,
and only paragraphs over the size cap fall back to sentence packing.
"""

from hybrid_rag.config.chunking.models import ChunkConfig
from hybrid_rag.services.chunking.models import Chunk
from hybrid_rag.services.chunking.structure import (
    CodeBlock,
    OffsetTracker,
    extract_code_blocks,
    pack_sentences,
    split_around_placeholders,
    split_by_headings,
    split_paragraphs,
    text_chunk,
)


def hybrid_chunks(text: str, config: ChunkConfig) -> list[Chunk]:
    """
    Chunk by headings → paragraphs → sentences. Each fenced code block becomes its own
    code chunk tagged with the enclosing section's heading, and is never split.
    """
    blocks: list[CodeBlock] = []
    working = text
    if config.separate_code_blocks:
        working, blocks = extract_code_blocks(text)

    tracker = OffsetTracker(text)
    chunks: list[Chunk] = []
    for section in split_by_headings(working):
        heading = {"parent_heading": section.heading, "heading_level": section.level}
        for paragraph in split_paragraphs(section.content):
            for piece in split_around_placeholders(paragraph, blocks):
                if isinstance(piece, CodeBlock):
                    tracker.advance_to(piece.end)
                    if not piece.content.strip():
                        continue
                    chunks.append(
                        Chunk(
                            content=piece.content,
                            index=len(chunks),
                            has_code=True,
                            code_language=piece.language,
                            start_offset=piece.start,
                            end_offset=piece.end,
                            chunk_type="code",
                            **heading,
                        )
                    )
                elif len(piece) <= config.max_chunk_size:
                    chunks.append(text_chunk(piece, len(chunks), tracker, **heading))
                else:
                    for part in pack_sentences(piece, config.max_chunk_size):
                        chunks.append(text_chunk(part, len(chunks), tracker, chunk_type="text", **heading))
    return chunks
