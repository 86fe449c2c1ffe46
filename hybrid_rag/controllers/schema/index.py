"""Request/response schemas for POST /index and DELETE /index/{document_id}."""

from typing import Any

from pydantic import BaseModel, Field

from hybrid_rag.controllers.schema.chunk import ChunkOverrides


class IndexRequest(ChunkOverrides):
    """
    POST /index request body. When content is omitted the document is loaded from
    raw_documents by document_id.
    """

    document_id: str = Field(..., min_length=1)
    content: str | None = Field(default=None, description="Document text; omit to load it from MongoDB")
    metadata: dict[str, Any] | None = Field(default=None, description="Stored with every chunk of the document")
    chunking_profile: str | None = Field(default=None, description="Defaults to the service's chunking profile")


class IndexResponse(BaseModel):
    document_id: str
    chunks_created: int = Field(..., ge=0)
    vectors_indexed: int = Field(..., ge=0)
    vectors_replaced: int = Field(default=0, ge=0)
    chunk_ids: list[str] = Field(default_factory=list)
    strategy: str
    status: str = Field(..., description="success|empty")


class DeleteResponse(BaseModel):
    document_id: str
    vectors_deleted: int = Field(..., ge=0)
