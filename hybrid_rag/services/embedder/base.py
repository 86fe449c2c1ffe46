"""Base embedding strategy and contract."""

from abc import ABC, abstractmethod

from hybrid_rag.config.embedding.models import EmbeddingConfig


class EmbeddingUnavailableError(RuntimeError):
    """Raised when a vector search is requested but no embedding provider can serve it."""


class BaseEmbeddingStrategy(ABC):
    """
    Abstract embedding strategy. Each strategy produces vectors with consistent dimension
    and does not perform normalization (handled by the adapter).
    """

    @abstractmethod
    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        """
        Embed a list of texts. Returns one vector per text in the same order.
        Caller is responsible for preprocessing and normalization.
        """
        ...

    @property
    @abstractmethod
    def strategy_name(self) -> str:
        """Strategy identifier, e.g. 'openai', 'sentence_transformers'."""
        ...

    def is_available(self, config: EmbeddingConfig) -> bool:
        """Whether the strategy has what it needs (credentials, model) to serve requests."""
        return True
