"""POST /chunk: chunk one document with a chunking profile plus per-request overrides. No storage."""

from fastapi import APIRouter, HTTPException

from hybrid_rag.config.chunking.static import resolve_chunking_config
from hybrid_rag.controllers.schema.chunk import ChunkOverrides, ChunkRequest
from hybrid_rag.services.chunking.chunker import chunk
from hybrid_rag.services.chunking.models import ChunkResult

router = APIRouter(prefix="/chunk", tags=["chunking"])

OVERRIDE_FIELDS = set(ChunkOverrides.model_fields)


@router.post("", response_model=ChunkResult)
def chunk_document(body: ChunkRequest) -> ChunkResult:
    """
    Chunk the given text. Chunking is CPU-bound, so this runs in FastAPI's threadpool.
    Unknown profiles and invalid size combinations return 400.
    """
    try:
        config = resolve_chunking_config(body.profile, body.model_dump(include=OVERRIDE_FIELDS))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return chunk(body.text, config)
