"""Text preprocessing before a strategy call and vector normalization after it."""

import math
import re

from hybrid_rag.config.embedding.models import EmbeddingConfig, EmbeddingPreprocessing

_PUNCTUATION = re.compile(r"[^\w\s]", flags=re.UNICODE)


def preprocess_text(text: str, opts: EmbeddingPreprocessing) -> str:
    """Trim, then optionally lowercase and strip punctuation; truncate to max_length characters."""
    s = text.strip()
    if opts.lowercase:
        s = s.lower()
    if opts.remove_punctuation:
        s = _PUNCTUATION.sub("", s)
    return s[: opts.max_length]


def _norm(vec: list[float], norm_type: str) -> float:
    if norm_type == "L1":
        return sum(abs(x) for x in vec) or 1.0
    return math.sqrt(sum(x * x for x in vec)) or 1.0


def normalize_vectors(vectors: list[list[float]], config: EmbeddingConfig) -> list[list[float]]:
    """
    Scale each vector by its L2 (default) or L1 norm when config.normalize is set.
    Unknown normalization types fall back to L2; 'none' leaves vectors untouched.
    """
    if not config.normalize or config.normalization_type == "none":
        return [list(v) for v in vectors]
    norm_type = config.normalization_type if config.normalization_type in ("L2", "L1") else "L2"
    out: list[list[float]] = []
    for vec in vectors:
        n = _norm(vec, norm_type)
        out.append([x / n for x in vec])
    return out
