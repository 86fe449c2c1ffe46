"""Mock embedding strategy for tests and offline runs. Produces deterministic fake vectors."""

import hashlib
import re

from hybrid_rag.config.embedding.models import EmbeddingConfig
from hybrid_rag.services.embedder.base import BaseEmbeddingStrategy

MOCK_DEFAULT_DIM = 384

_DIM_IN_NAME = re.compile(r"(\d{2,5})$")


def _mock_dimension(config: EmbeddingConfig) -> int:
    if config.dimensions is not None:
        return config.dimensions
    match = _DIM_IN_NAME.search(config.model)
    return int(match.group(1)) if match else MOCK_DEFAULT_DIM


class MockEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Deterministic fake embeddings: each dimension is derived from SHA-256 of the text, so the
    same text always maps to the same vector across processes. Dimension comes from
    config.dimensions, a trailing number in the model name (mock-embedding-1536), or 384.
    """

    @property
    def strategy_name(self) -> str:
        return "mock"

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        dim = _mock_dimension(config)
        result: list[list[float]] = []
        for text in texts:
            seed = hashlib.sha256(text.encode("utf-8")).digest()
            result.append([(seed[j % len(seed)] + j) % 256 / 255.0 - 0.5 for j in range(dim)])
        return result
