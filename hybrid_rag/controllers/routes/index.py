"""POST /index: chunk, embed and store one document. DELETE /index/{document_id}: remove its vectors."""

from fastapi import APIRouter, Depends, HTTPException

from hybrid_rag.config.chunking.static import resolve_chunking_config
from hybrid_rag.config.logging import get_logger
from hybrid_rag.config.profiles import apply_overrides
from hybrid_rag.controllers.dependencies import get_services
from hybrid_rag.controllers.schema.chunk import ChunkOverrides
from hybrid_rag.controllers.schema.index import DeleteResponse, IndexRequest, IndexResponse
from hybrid_rag.repositories.mongodb.base import RepositoryError
from hybrid_rag.repositories.mongodb.documents_repository import get_raw_document, raw_document_text
from hybrid_rag.services.container import Services
from hybrid_rag.services.embedder.base import EmbeddingUnavailableError

logger = get_logger(__name__)

router = APIRouter(prefix="/index", tags=["indexing"])

OVERRIDE_FIELDS = set(ChunkOverrides.model_fields)


async def _load_content(document_id: str) -> str:
    try:
        raw = await get_raw_document(document_id)
    except RepositoryError as e:
        raise HTTPException(status_code=503, detail="Storage temporarily unavailable") from e
    if raw is None:
        raise HTTPException(status_code=404, detail=f"Document not found: {document_id}")
    return raw_document_text(raw)


@router.post("", response_model=IndexResponse)
async def index_document(body: IndexRequest, services: Services = Depends(get_services)) -> IndexResponse:
    """
    Index a document, replacing any earlier version of it.
    Idempotent: same document + same content + same chunking → same point ids.
    """
    overrides = body.model_dump(include=OVERRIDE_FIELDS)
    try:
        if body.chunking_profile:
            config = resolve_chunking_config(body.chunking_profile, overrides)
        else:
            config = apply_overrides(services.chunk_config, overrides)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    content = body.content if body.content is not None else await _load_content(body.document_id)

    try:
        result = await services.ingestion.index_document(
            body.document_id, content, metadata=body.metadata, chunk_config=config
        )
    except EmbeddingUnavailableError as e:
        raise HTTPException(status_code=503, detail="Embedding service not available") from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return IndexResponse(
        document_id=result.document_id,
        chunks_created=result.chunk_count,
        vectors_indexed=result.indexed_count,
        vectors_replaced=result.replaced_count,
        chunk_ids=result.chunk_ids,
        strategy=result.strategy,
        status="success" if result.chunk_count else "empty",
    )


@router.delete("/{document_id}", response_model=DeleteResponse)
async def remove_document(document_id: str, services: Services = Depends(get_services)) -> DeleteResponse:
    deleted = await services.ingestion.remove_document(document_id)
    return DeleteResponse(document_id=document_id, vectors_deleted=deleted)
