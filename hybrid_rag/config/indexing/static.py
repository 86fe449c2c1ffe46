"""k-NN index profiles from static.json."""

from pathlib import Path
from typing import Any

from hybrid_rag.config.indexing.models import IndexingConfig
from hybrid_rag.config.profiles import ProfileStore

_store = ProfileStore(
    Path(__file__).resolve().parent / "static.json", IndexingConfig, "indexing", default_active="cosine_default"
)


def resolve_indexing_config(profile_or_inline: str | dict[str, Any]) -> IndexingConfig:
    """
    Resolve indexing config from a profile name or an inline object.
    Raises ValueError if the profile is unknown or the inline dict invalid.
    """
    if isinstance(profile_or_inline, dict):
        return IndexingConfig.model_validate(profile_or_inline)
    return _store.resolve(profile_or_inline.strip())
