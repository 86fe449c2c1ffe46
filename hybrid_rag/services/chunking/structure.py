"""
Structural splitting primitives shared by the chunking strategies: code fences, markdown
headings, paragraphs and sentences, plus the greedy packers that keep pieces under a size cap.
All functions are pure.
"""

import re
from dataclasses import dataclass

from hybrid_rag.services.chunking.models import Chunk, ChunkType

HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(\S.*)$", re.MULTILINE)
CODE_BLOCK_PATTERN = re.compile(r"```(\w*)\n(.*?)```", re.DOTALL)
PARAGRAPH_PATTERN = re.compile(r"\n\s*\n")
SENTENCE_PATTERN = re.compile(r"(?<=[.!?])\s+(?=[A-Z])")
LIST_ITEM_PATTERN = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+", re.MULTILINE)

# Private-use code points cannot collide with ordinary document text.
_PLACEHOLDER_OPEN = "\ue000"
_PLACEHOLDER_CLOSE = "\ue001"
PLACEHOLDER_PATTERN = re.compile(f"{_PLACEHOLDER_OPEN}CODE_BLOCK_(\\d+){_PLACEHOLDER_CLOSE}")


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block lifted out of the document before structural splitting."""

    language: str
    content: str
    start: int
    end: int


@dataclass(frozen=True)
class Section:
    """Text under one heading (or before the first heading, when heading is None)."""

    content: str
    heading: str | None = None
    level: int | None = None
    start: int = 0
    end: int = 0


def code_placeholder(index: int) -> str:
    return f"{_PLACEHOLDER_OPEN}CODE_BLOCK_{index}{_PLACEHOLDER_CLOSE}"


def extract_code_blocks(text: str) -> tuple[str, list[CodeBlock]]:
    """
    Replace every fenced code block with a placeholder token.
    Returns (text_with_placeholders, blocks); blocks[i] belongs to code_placeholder(i)
    and keeps its span in the original text.
    """
    blocks: list[CodeBlock] = []

    def _replace(match: re.Match) -> str:
        blocks.append(
            CodeBlock(
                language=match.group(1) or "text",
                content=match.group(2).strip("\n"),
                start=match.start(),
                end=match.end(),
            )
        )
        return code_placeholder(len(blocks) - 1)

    return CODE_BLOCK_PATTERN.sub(_replace, text), blocks


def split_around_placeholders(paragraph: str, blocks: list[CodeBlock]) -> list[str | CodeBlock]:
    """Split a paragraph into text pieces and the code blocks its placeholders stand for, in order."""
    pieces: list[str | CodeBlock] = []
    cursor = 0
    for match in PLACEHOLDER_PATTERN.finditer(paragraph):
        idx = int(match.group(1))
        if idx >= len(blocks):
            continue
        before = paragraph[cursor : match.start()].strip()
        if before:
            pieces.append(before)
        pieces.append(blocks[idx])
        cursor = match.end()
    tail = paragraph[cursor:].strip()
    if tail:
        pieces.append(tail)
    return pieces


def split_by_headings(text: str, keep_empty: bool = False) -> list[Section]:
    """
    Split markdown text into sections at heading lines (# to ######).
    Content before the first heading becomes an unheaded section. Headings with no body are
    dropped unless keep_empty is set.
    """
    matches = list(HEADING_PATTERN.finditer(text))
    if not matches:
        body = text.strip()
        return [Section(content=body, start=0, end=len(text))] if body else []

    sections: list[Section] = []
    leading = text[: matches[0].start()].strip()
    if leading:
        sections.append(Section(content=leading, start=0, end=matches[0].start()))

    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        body = text[match.end() : end].strip()
        if not body and not keep_empty:
            continue
        sections.append(
            Section(
                content=body,
                heading=match.group(2).strip(),
                level=len(match.group(1)),
                start=match.start(),
                end=end,
            )
        )
    return sections


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines; returns trimmed, non-empty paragraphs."""
    return [p.strip() for p in PARAGRAPH_PATTERN.split(text) if p.strip()]


def split_sentences(text: str) -> list[str]:
    """Split on . ! ? followed by whitespace and a capital letter."""
    return [s.strip() for s in SENTENCE_PATTERN.split(text) if s.strip()]


def pack_sentences(text: str, max_size: int) -> list[str]:
    """
    Greedily pack sentences (joined by a space) into pieces of at most max_size characters.
    A single sentence longer than max_size is hard-split at exact character boundaries.
    """
    pieces: list[str] = []
    current = ""
    for sentence in split_sentences(text):
        if len(current) + len(sentence) + 1 <= max_size:
            current = f"{current} {sentence}" if current else sentence
            continue
        if current:
            pieces.append(current)
        if len(sentence) > max_size:
            pieces.extend(sentence[i : i + max_size] for i in range(0, len(sentence), max_size))
            current = ""
        else:
            current = sentence
    if current:
        pieces.append(current)
    return pieces


def pack_paragraphs(paragraphs: list[str], max_size: int) -> list[str]:
    """
    Greedily pack whole paragraphs (joined by a blank line) into pieces of at most max_size.
    A paragraph that alone exceeds max_size is sentence-packed on its own.
    """
    pieces: list[str] = []
    current = ""
    for paragraph in paragraphs:
        joined_len = len(current) + 2 + len(paragraph) if current else len(paragraph)
        if joined_len <= max_size:
            current = f"{current}\n\n{paragraph}" if current else paragraph
            continue
        if current:
            pieces.append(current)
            current = ""
        if len(paragraph) > max_size:
            pieces.extend(pack_sentences(paragraph, max_size))
        else:
            current = paragraph
    if current:
        pieces.append(current)
    return pieces


def has_code(text: str) -> bool:
    """True for fenced blocks and inline code spans alike."""
    return "`" in text


def detect_chunk_type(text: str) -> ChunkType:
    if CODE_BLOCK_PATTERN.search(text):
        return "code"
    if HEADING_PATTERN.search(text):
        return "heading"
    if LIST_ITEM_PATTERN.search(text):
        return "list"
    return "text"


class OffsetTracker:
    """
    Maps emitted pieces back to character offsets in the source text by scanning forward.
    Pieces re-joined by the packers may not appear verbatim; their leading text is tried next,
    then the current cursor is used.
    """

    _PROBE_LENGTH = 32

    def __init__(self, source: str) -> None:
        self._source = source
        self._cursor = 0

    def locate(self, piece: str) -> tuple[int, int]:
        start = self._source.find(piece, self._cursor)
        if start < 0:
            start = self._source.find(piece[: self._PROBE_LENGTH], self._cursor)
        if start < 0:
            start = min(self._cursor, len(self._source))
        end = min(start + len(piece), len(self._source))
        self._cursor = end
        return start, end

    def advance_to(self, offset: int) -> None:
        self._cursor = max(self._cursor, offset)


def text_chunk(
    content: str,
    index: int,
    tracker: OffsetTracker,
    *,
    chunk_type: ChunkType | None = None,
    parent_heading: str | None = None,
    heading_level: int | None = None,
) -> Chunk:
    """Build a non-code chunk, sniffing its type unless one is given."""
    start, end = tracker.locate(content)
    return Chunk(
        content=content,
        index=index,
        parent_heading=parent_heading,
        heading_level=heading_level,
        has_code=has_code(content),
        start_offset=start,
        end_offset=end,
        chunk_type=chunk_type or detect_chunk_type(content),
    )
