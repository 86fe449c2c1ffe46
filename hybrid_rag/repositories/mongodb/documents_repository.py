"""Async read of raw documents by document_id from raw_documents. No writes."""

from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from hybrid_rag.repositories.mongodb.base import (
    RAW_DOCUMENTS_COLLECTION,
    _translate_pymongo_error,
    get_collection,
)


async def get_raw_document(document_id: str, db: AsyncIOMotorDatabase | None = None) -> dict[str, Any] | None:
    """
    Return the raw document with the given document_id, or None if not found.
    Crawler-imported documents carry source_id instead; that field is tried second.
    """
    coll = get_collection(RAW_DOCUMENTS_COLLECTION, db)
    try:
        doc = await coll.find_one({"document_id": document_id})
        if doc is not None:
            return doc
        return await coll.find_one({"source_id": document_id})
    except PyMongoError as e:
        raise _translate_pymongo_error(e, "read raw document") from e


def raw_document_text(doc: dict[str, Any]) -> str:
    """Body text of a raw document; crawler documents store it as full_content."""
    return doc.get("full_content") or doc.get("content") or ""
