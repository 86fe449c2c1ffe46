"""OpenAI Embeddings API strategy."""

from openai import OpenAI

from hybrid_rag.config.embedding.models import EmbeddingConfig
from hybrid_rag.config.settings import get_settings
from hybrid_rag.services.embedder.base import BaseEmbeddingStrategy


class OpenAIEmbeddingStrategy(BaseEmbeddingStrategy):
    """
    OpenAI Embeddings API (text-embedding-3-small, text-embedding-3-large, ada-002).
    API key from config.api_key or settings.openai_api_key. One client per key, created lazily.
    """

    def __init__(self) -> None:
        self._client: OpenAI | None = None
        self._client_key: str | None = None

    @property
    def strategy_name(self) -> str:
        return "openai"

    @staticmethod
    def _api_key(config: EmbeddingConfig) -> str | None:
        return config.api_key or get_settings().openai_api_key or None

    def is_available(self, config: EmbeddingConfig) -> bool:
        return self._api_key(config) is not None

    def _get_client(self, api_key: str) -> OpenAI:
        if self._client is None or self._client_key != api_key:
            self._client = OpenAI(api_key=api_key)
            self._client_key = api_key
        return self._client

    def embed(self, texts: list[str], config: EmbeddingConfig) -> list[list[float]]:
        if not texts:
            return []
        api_key = self._api_key(config)
        if not api_key:
            raise ValueError("OpenAI API key is required (set in config or OPENAI_API_KEY)")
        kwargs = {"model": config.model, "input": texts, "encoding_format": "float"}
        if config.dimensions is not None:
            kwargs["dimensions"] = config.dimensions
        response = self._get_client(api_key).embeddings.create(**kwargs)
        if len(response.data) != len(texts):
            raise ValueError(f"OpenAI returned {len(response.data)} embeddings for {len(texts)} inputs")
        # Preserve input order by index
        return [item.embedding for item in sorted(response.data, key=lambda item: item.index)]
