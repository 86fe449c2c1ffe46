"""
Keyword source over MongoDB collections: case-insensitive substring matching with $regex.
Not a full-text index; scoring happens in the keyword search service.
"""

import re
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from hybrid_rag.config.logging import get_logger
from hybrid_rag.repositories.mongodb.base import _translate_pymongo_error, get_collection
from hybrid_rag.resources.mongo.client import get_database
from hybrid_rag.services.search.base import BaseKeywordSource, KeywordSourceUnavailableError

logger = get_logger(__name__)


def build_contains_query(
    contains_filter: dict[str, list[str]], filter: dict[str, Any] | None = None
) -> dict[str, Any]:
    """
    Build {"$and": [{"$or": [field ~ /term/i, ...]}, <equality filter>]}.
    List values in the equality filter become $in. Terms are regex-escaped.
    """
    alternatives = [
        {field: {"$regex": re.escape(term), "$options": "i"}}
        for field, terms in contains_filter.items()
        for term in terms
        if term
    ]
    conditions: list[dict[str, Any]] = []
    if alternatives:
        conditions.append({"$or": alternatives})
    for field, value in (filter or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set)):
            conditions.append({field: {"$in": list(value)}})
        else:
            conditions.append({field: value})
    if not conditions:
        return {}
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


class MongoKeywordSource(BaseKeywordSource):
    def __init__(self, db: AsyncIOMotorDatabase | None = None) -> None:
        self._db = db

    @property
    def db(self) -> AsyncIOMotorDatabase:
        return self._db if self._db is not None else get_database()

    async def query(
        self,
        collection_name: str,
        contains_filter: dict[str, list[str]],
        limit: int,
        filter: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        if limit <= 0:
            return []
        try:
            names = await self.db.list_collection_names(filter={"name": collection_name})
        except PyMongoError as e:
            raise _translate_pymongo_error(e, f"list collection {collection_name}") from e
        if collection_name not in names:
            raise KeywordSourceUnavailableError(f"Collection '{collection_name}' does not exist")

        query = build_contains_query(contains_filter, filter)
        coll = get_collection(collection_name, self.db)
        try:
            cursor = coll.find(query).limit(limit)
            docs = [doc async for doc in cursor]
        except PyMongoError as e:
            raise _translate_pymongo_error(e, f"keyword query on {collection_name}") from e
        logger.debug(
            "Keyword source query",
            extra={"collection": collection_name, "limit": limit, "returned": len(docs)},
        )
        return docs
