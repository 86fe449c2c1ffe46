"""
Embedding adapter: the text → vector contract consumed by ingestion and search.
Wraps one strategy plus its config; applies preprocessing and normalization; batches
provider calls (at most MAX_BATCH_SIZE texts each, issued one after another).
Strategy calls are blocking, so they run in a worker thread to keep the event loop free.
"""

import asyncio

from hybrid_rag.config.embedding.models import EmbeddingConfig
from hybrid_rag.config.logging import get_logger
from hybrid_rag.services.embedder.base import BaseEmbeddingStrategy
from hybrid_rag.services.embedder.strategies import get_embedding_strategy
from hybrid_rag.services.embedder.transforms import normalize_vectors, preprocess_text

logger = get_logger(__name__)

MAX_BATCH_SIZE = 100


class EmbeddingAdapter:
    """Stateless facade over an embedding strategy. Construct once and share."""

    def __init__(self, strategy: BaseEmbeddingStrategy, config: EmbeddingConfig) -> None:
        self._strategy = strategy
        self._config = config

    @classmethod
    def from_config(cls, config: EmbeddingConfig) -> "EmbeddingAdapter":
        strategy = get_embedding_strategy(config.strategy)
        if strategy is None:
            raise ValueError(f"Unknown embedding strategy: {config.strategy!r}")
        return cls(strategy, config)

    @property
    def config(self) -> EmbeddingConfig:
        return self._config

    @property
    def model(self) -> str:
        return self._config.model

    @property
    def dimension(self) -> int | None:
        """Requested output dimension; None means the model's native size."""
        return self._config.dimensions

    @property
    def batch_size(self) -> int:
        return min(self._config.batch_size, MAX_BATCH_SIZE)

    def is_available(self) -> bool:
        return self._strategy.is_available(self._config)

    async def embed(self, text: str) -> list[float]:
        """Embed a single text. Raises ValueError for empty text."""
        vectors = await self.embed_batch([text])
        return vectors[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts in order, one vector per text. Raises ValueError if any text is empty
        (dropping it would misalign vectors with their texts).
        """
        if not texts:
            return []
        if any(not t or not t.strip() for t in texts):
            raise ValueError("Cannot generate embeddings for empty text")

        prepared = [preprocess_text(t, self._config.preprocessing) for t in texts]
        vectors: list[list[float]] = []
        for start in range(0, len(prepared), self.batch_size):
            batch = prepared[start : start + self.batch_size]
            batch_vectors = await asyncio.to_thread(self._strategy.embed, batch, self._config)
            if len(batch_vectors) != len(batch):
                raise ValueError(f"Strategy returned {len(batch_vectors)} vectors but expected {len(batch)}")
            vectors.extend(batch_vectors)

        logger.debug(
            "Embeddings generated",
            extra={"strategy": self._strategy.strategy_name, "model": self._config.model, "count": len(vectors)},
        )
        return normalize_vectors(vectors, self._config)
