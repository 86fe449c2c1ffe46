"""
Ingestion: document → chunks → embeddings → vector store points.

Re-indexing a document first removes its previous points, so a shorter new version leaves
no stale chunks behind. Point ids are deterministic per (document, index, chunk hash).
"""

from typing import Any

from hybrid_rag.config.chunking.models import DEFAULT_CHUNK_CONFIG, ChunkConfig
from hybrid_rag.config.logging import get_logger
from hybrid_rag.services.chunking.chunker import chunk, compute_chunk_hash
from hybrid_rag.services.chunking.models import Chunk
from hybrid_rag.services.chunking.tokenizer import count_tokens
from hybrid_rag.services.embedder.adapter import EmbeddingAdapter
from hybrid_rag.services.embedder.base import EmbeddingUnavailableError
from hybrid_rag.services.ingestion.models import IngestionResult
from hybrid_rag.services.search.base import BaseVectorStore
from hybrid_rag.utils.ids import generate_chunk_id
from hybrid_rag.utils.time import utc_now_iso

logger = get_logger(__name__)

DOCUMENT_ID_FIELD = "document_id"

# Chunk fields copied into each point payload
_CHUNK_PAYLOAD_FIELDS = (
    "parent_heading",
    "heading_level",
    "has_code",
    "code_language",
    "start_offset",
    "end_offset",
    "chunk_type",
)


def build_payload(
    document_id: str,
    c: Chunk,
    chunk_hash: str,
    indexed_at: str,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Caller metadata first, so chunk fields and document_id always win on a key clash."""
    payload: dict[str, Any] = dict(metadata or {})
    payload.update({field: getattr(c, field) for field in _CHUNK_PAYLOAD_FIELDS})
    payload.update(
        {
            DOCUMENT_ID_FIELD: document_id,
            "content": c.content,
            "chunk_index": c.index,
            "chunk_hash": chunk_hash,
            "token_count": count_tokens(c.content),
            "indexed_at": indexed_at,
        }
    )
    return payload


class IngestionPipeline:
    def __init__(
        self,
        embedder: EmbeddingAdapter | None,
        vector_store: BaseVectorStore,
        default_chunk_config: ChunkConfig = DEFAULT_CHUNK_CONFIG,
    ) -> None:
        self._embedder = embedder
        self._vector_store = vector_store
        self._default_chunk_config = default_chunk_config

    async def index_document(
        self,
        document_id: str,
        content: str,
        metadata: dict[str, Any] | None = None,
        chunk_config: ChunkConfig | None = None,
    ) -> IngestionResult:
        """
        Chunk, embed and store a document, replacing any previous version.
        Raises ValueError for a blank document_id and EmbeddingUnavailableError without an embedder.
        Vector store failures propagate as VectorStoreError.
        """
        if not document_id or not document_id.strip():
            raise ValueError("document_id must be non-empty")
        if self._embedder is None or not self._embedder.is_available():
            raise EmbeddingUnavailableError("Embedding service not available")

        config = chunk_config or self._default_chunk_config
        result = chunk(content, config)
        chunks = [c for c in result.chunks if c.content.strip()]

        vectors = await self._embedder.embed_batch([c.content for c in chunks]) if chunks else []

        await self._vector_store.ensure_collection()
        replaced = await self._vector_store.delete_by_filter({DOCUMENT_ID_FIELD: document_id})
        if not chunks:
            logger.info("Document has no content to index", extra={"document_id": document_id})
            return IngestionResult(document_id=document_id, replaced_count=replaced, strategy=config.strategy)

        indexed_at = utc_now_iso()
        points: list[dict[str, Any]] = []
        for c, vector in zip(chunks, vectors):
            chunk_hash = compute_chunk_hash(c.content, config)
            points.append(
                {
                    "id": generate_chunk_id(document_id, c.index, chunk_hash),
                    "vector": vector,
                    "payload": build_payload(document_id, c, chunk_hash, indexed_at, metadata),
                }
            )
        indexed = await self._vector_store.upsert(points)

        logger.info(
            "Document indexed",
            extra={
                "document_id": document_id,
                "chunk_count": len(chunks),
                "indexed_count": indexed,
                "replaced_count": replaced,
                "strategy": config.strategy,
            },
        )
        return IngestionResult(
            document_id=document_id,
            chunk_count=len(chunks),
            indexed_count=indexed,
            replaced_count=replaced,
            chunk_ids=[p["id"] for p in points],
            strategy=config.strategy,
        )

    async def remove_document(self, document_id: str) -> int:
        """Delete every point of a document. Returns the number of points removed."""
        if not document_id or not document_id.strip():
            raise ValueError("document_id must be non-empty")
        deleted = await self._vector_store.delete_by_filter({DOCUMENT_ID_FIELD: document_id})
        logger.info("Document removed", extra={"document_id": document_id, "deleted": deleted})
        return deleted
