"""Sentence Transformers (local) embedding strategy."""

from sentence_transformers import SentenceTransformer

from hybrid_rag.config.embedding.models import EmbeddingConfig
from hybrid_rag.services.embedder.base import BaseEmbeddingStrategy


class SentenceTransformersEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    Local Sentence Transformers, e.g. sentence-transformers/all-MiniLM-L6-v2.
    No API key required; the model is loaded on first use and kept for later calls.
    """

    def __init__(self) -> None:
        self._model: SentenceTransformer | None = None
        self._model_name: str | None = None

    @property
    def strategy_name(self) -> str:
        return "sentence_transformers"

    def _get_model(self, config: EmbeddingConfig) -> SentenceTransformer:
        if self._model is None or self._model_name != config.model:
            self._model = SentenceTransformer(config.model, truncate_dim=config.dimensions)
            self._model_name = config.model
        return self._model

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        if not texts:
            return []
        vectors = self._get_model(config).encode(
            texts,
            batch_size=config.batch_size,
            show_progress_bar=False,
            convert_to_numpy=True,
        )
        return [v.tolist() for v in vectors]
