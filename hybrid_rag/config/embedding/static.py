"""Embedding profiles from static.json. Strategy names resolve to that strategy's default profile."""

from pathlib import Path
from typing import Any

from hybrid_rag.config.embedding.models import EmbeddingConfig
from hybrid_rag.config.profiles import ProfileStore

_STRATEGY_TO_PROFILE: dict[str, str] = {
    "openai": "openai_default",
    "sentence_transformers": "sentence_default",
    "bedrock": "bedrock_default",
    "mock": "mock_default",
}

_store = ProfileStore(
    Path(__file__).resolve().parent / "static.json",
    EmbeddingConfig,
    "embedding",
    default_active="openai_default",
    aliases=_STRATEGY_TO_PROFILE,
)


def resolve_embedding_config(profile_name: str, inline_config: dict[str, Any] | None = None) -> EmbeddingConfig:
    return _store.resolve(profile_name, inline_config)
