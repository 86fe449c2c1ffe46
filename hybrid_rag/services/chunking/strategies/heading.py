"""Heading chunking: one chunk per markdown section, heading line included."""

from hybrid_rag.config.chunking.models import ChunkConfig
from hybrid_rag.services.chunking.models import Chunk
from hybrid_rag.services.chunking.structure import (
    OffsetTracker,
    pack_paragraphs,
    split_by_headings,
    split_paragraphs,
    text_chunk,
)


def heading_chunks(text: str, config: ChunkConfig) -> list[Chunk]:
    """
    Emit each section (heading + body) as a chunk; a heading with no body is emitted on its own.
    A section over max_chunk_size is paragraph-packed instead, keeping its heading as metadata.
    """
    tracker = OffsetTracker(text)
    chunks: list[Chunk] = []
    for section in split_by_headings(text, keep_empty=True):
        heading = {"parent_heading": section.heading, "heading_level": section.level}
        if section.heading:
            heading_line = f"{'#' * section.level} {section.heading}"
            section_text = f"{heading_line}\n\n{section.content}" if section.content else heading_line
        else:
            section_text = section.content

        if len(section_text) <= config.max_chunk_size:
            tracker.advance_to(section.start)
            chunks.append(
                text_chunk(
                    section_text,
                    len(chunks),
                    tracker,
                    chunk_type="heading" if section.heading else None,
                    **heading,
                )
            )
            continue

        for part in pack_paragraphs(split_paragraphs(section.content), config.max_chunk_size):
            chunks.append(text_chunk(part, len(chunks), tracker, **heading))
    return chunks
