"""Chunking profiles from static.json."""

from pathlib import Path
from typing import Any

from hybrid_rag.config.chunking.models import ChunkConfig
from hybrid_rag.config.profiles import ProfileStore

_store = ProfileStore(Path(__file__).resolve().parent / "static.json", ChunkConfig, "chunking")


def resolve_chunking_config(profile_name: str, overrides: dict[str, Any] | None = None) -> ChunkConfig:
    """Resolve a chunking profile ('active' for the configured one) plus inline overrides."""
    return _store.resolve(profile_name, overrides)
