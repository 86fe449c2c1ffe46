"""
Keyword search across the configured document collections of a keyword source.
Each collection is queried for items whose title or body contains any query keyword;
items are then scored heuristically and ranked.
"""

from typing import Any

from hybrid_rag.config.logging import get_logger
from hybrid_rag.config.search.models import KeywordCollection
from hybrid_rag.services.search.base import BaseKeywordSource
from hybrid_rag.services.search.keywords import calculate_keyword_score, extract_keywords
from hybrid_rag.services.search.models import KeywordResult

logger = get_logger(__name__)


def _to_result(item: dict[str, Any], collection: KeywordCollection) -> KeywordResult:
    title = item.get(collection.title_field) or ""
    body = item.get(collection.content_field) or ""
    metadata: dict[str, Any] = {"title": item.get(collection.title_field)}
    for field in collection.metadata_fields:
        metadata[field] = item.get(field)
    metadata["collection"] = collection.name
    return KeywordResult(
        id=str(item.get(collection.id_field, item.get("_id", ""))),
        content=f"{title}\n{body}",
        metadata=metadata,
    )


class KeywordSearch:
    def __init__(self, source: BaseKeywordSource, collections: list[KeywordCollection]) -> None:
        self._source = source
        self._collections = list(collections)

    @property
    def collections(self) -> list[KeywordCollection]:
        return list(self._collections)

    async def search(self, query: str, limit: int = 20, filter: dict[str, Any] | None = None) -> list[KeywordResult]:
        """
        Rank items from every collection by keyword score, best first, at most limit.
        A collection that is missing or fails is logged and skipped.
        """
        keywords = extract_keywords(query)
        if not keywords or limit <= 0:
            return []

        candidates: list[KeywordResult] = []
        for collection in self._collections:
            contains = {collection.title_field: keywords, collection.content_field: keywords}
            try:
                items = await self._source.query(collection.name, contains, limit, filter)
            except Exception as e:
                logger.info(
                    "Keyword collection skipped",
                    extra={"collection": collection.name, "error_type": type(e).__name__, "error": str(e)},
                )
                continue
            candidates.extend(_to_result(item, collection) for item in items)

        scored = [c.model_copy(update={"rank": calculate_keyword_score(c.content, keywords)}) for c in candidates]
        scored.sort(key=lambda r: r.rank, reverse=True)
        logger.debug(
            "Keyword search completed",
            extra={"keywords": keywords, "candidates": len(candidates), "limit": limit},
        )
        return scored[:limit]
