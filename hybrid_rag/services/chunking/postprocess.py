"""Post-processing passes run over strategy output: overlap injection, small-chunk merging, reindexing."""

import re

from hybrid_rag.services.chunking.models import Chunk

OVERLAP_SEPARATOR = "... "

_WHITESPACE = re.compile(r"\s")


def overlap_prefix(previous: str, overlap_size: int) -> str:
    """
    Last overlap_size characters of previous, moved forward past a cut word so the prefix
    starts on a whole word. A tail with no whitespace at all is kept as-is.
    """
    if overlap_size <= 0 or not previous:
        return ""
    tail = previous[-overlap_size:]
    cut_mid_word = len(previous) > overlap_size and not previous[-overlap_size - 1].isspace()
    if cut_mid_word:
        boundary = _WHITESPACE.search(tail)
        if boundary is not None:
            tail = tail[boundary.end() :]
    return tail.strip()


def _starts_with_overlap(content: str, prefix: str) -> bool:
    """
    True when content already begins with prefix, or with a word-aligned suffix of it followed
    by the separator. A previous chunk shorter than the window carries its own injected overlap,
    so on a second pass its tail reaches back past the overlap already on content.
    """
    if content.startswith(prefix):
        return True
    for boundary in _WHITESPACE.finditer(prefix):
        suffix = prefix[boundary.end() :]
        if suffix and content.startswith(f"{suffix}{OVERLAP_SEPARATOR}"):
            return True
    return False


def add_overlap(chunks: list[Chunk], overlap_size: int) -> list[Chunk]:
    """
    Prefix every chunk after the first with the tail of the chunk before it, as
    "<overlap>... <content>". Chunks that already carry that overlap are left alone,
    so running the pass twice does not stack prefixes.
    """
    if overlap_size <= 0 or len(chunks) <= 1:
        return list(chunks)

    out = [chunks[0]]
    for previous, chunk in zip(chunks, chunks[1:]):
        prefix = overlap_prefix(previous.content, overlap_size)
        if prefix and not _starts_with_overlap(chunk.content, prefix):
            chunk = chunk.model_copy(update={"content": f"{prefix}{OVERLAP_SEPARATOR}{chunk.content}"})
        out.append(chunk)
    return out


def _join(first: Chunk, second: Chunk) -> Chunk:
    return first.model_copy(
        update={
            "content": f"{first.content}\n\n{second.content}",
            "end_offset": second.end_offset,
            "has_code": first.has_code or second.has_code,
            "code_language": first.code_language or second.code_language,
        }
    )


def merge_small_chunks(chunks: list[Chunk], min_size: int, max_size: int | None = None) -> list[Chunk]:
    """
    Fold chunks shorter than min_size into the chunks that follow them.

    A pending small chunk keeps absorbing its successors while the combined length stays
    under 3 * min_size (and, when max_size is given, within max_size). When the bound is hit
    the pending chunk is emitted; the incoming chunk becomes the new pending one if it is
    itself small. A pending chunk left at the end is appended to the last emitted chunk.
    Only the 3 * min_size bound flushes a pending chunk; a successor that reaches min_size on
    its own is still absorbed while the combined length is under that bound.
    """
    if min_size <= 0 or len(chunks) <= 1:
        return list(chunks)

    def fits(a: Chunk, b: Chunk) -> bool:
        return max_size is None or len(a.content) + 2 + len(b.content) <= max_size

    merged: list[Chunk] = []
    pending: Chunk | None = None
    for chunk in chunks:
        if pending is not None:
            if len(pending.content) + len(chunk.content) < min_size * 3 and fits(pending, chunk):
                pending = _join(pending, chunk)
                continue
            merged.append(pending)
            pending = None
        if len(chunk.content) < min_size:
            pending = chunk
        else:
            merged.append(chunk)

    if pending is not None:
        if merged and fits(merged[-1], pending):
            merged[-1] = _join(merged[-1], pending)
        else:
            merged.append(pending)
    return merged


def reindex(chunks: list[Chunk]) -> list[Chunk]:
    """Reassign index 0..N-1 in list order."""
    return [c if c.index == i else c.model_copy(update={"index": i}) for i, c in enumerate(chunks)]
