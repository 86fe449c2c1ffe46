"""Search profiles and keyword collections from static.json."""

from pathlib import Path
from typing import Any

from hybrid_rag.config.profiles import ProfileStore
from hybrid_rag.config.search.models import HybridSearchOptions, KeywordCollection

_store = ProfileStore(Path(__file__).resolve().parent / "static.json", HybridSearchOptions, "search")


def resolve_search_options(profile_name: str, overrides: dict[str, Any] | None = None) -> HybridSearchOptions:
    """Resolve a search profile ('active' for the configured one) plus inline overrides (None ignored)."""
    return _store.resolve(profile_name, overrides)


def load_keyword_collections() -> list[KeywordCollection]:
    """Keyword collections in search order."""
    return [KeywordCollection.model_validate(c) for c in _store.raw.get("keyword_collections", [])]
