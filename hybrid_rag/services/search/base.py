"""Contracts for the storage collaborators behind search: a vector store and a keyword source."""

from abc import ABC, abstractmethod
from typing import Any

from hybrid_rag.services.search.models import SearchResult


class KeywordSourceUnavailableError(RuntimeError):
    """Raised when a keyword collection does not exist or cannot be queried."""


class BaseVectorStore(ABC):
    """
    Persists (id, vector, payload) points and answers top-K cosine similarity queries.
    Filters are flat {field: value | [values]} equality maps over payload fields.
    """

    @abstractmethod
    async def ensure_collection(self) -> None:
        """Create the backing collection if missing. Idempotent."""
        ...

    @abstractmethod
    async def upsert(self, points: list[dict[str, Any]]) -> int:
        """Insert or replace points shaped {id, vector, payload}. Returns the number written."""
        ...

    @abstractmethod
    async def search(
        self, vector: list[float], k: int, filter: dict[str, Any] | None = None
    ) -> list[SearchResult]:
        """Return up to k nearest points, best first."""
        ...

    @abstractmethod
    async def delete_by_filter(self, filter: dict[str, Any]) -> int:
        """Delete every point matching filter. Returns the number deleted."""
        ...


class BaseKeywordSource(ABC):
    """Document collections queryable with simple substring (contains) filters. Not a full-text index."""

    @abstractmethod
    async def query(
        self,
        collection_name: str,
        contains_filter: dict[str, list[str]],
        limit: int,
        filter: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Return up to limit documents where any field in contains_filter contains any of its
        substrings (case-insensitive), further restricted by the equality filter.
        Raises KeywordSourceUnavailableError when the collection cannot be queried.
        """
        ...


class VectorStoreError(RuntimeError):
    """Raised when the vector store rejects or fails an operation."""
