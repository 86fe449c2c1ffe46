"""
Composition root: builds the long-lived services once from Settings and the static profiles.
No business logic. The FastAPI lifespan stores the result on app.state.
"""

from dataclasses import dataclass

from hybrid_rag.config.chunking.models import ChunkConfig
from hybrid_rag.config.chunking.static import resolve_chunking_config
from hybrid_rag.config.embedding.static import resolve_embedding_config
from hybrid_rag.config.indexing.static import resolve_indexing_config
from hybrid_rag.config.logging import get_logger
from hybrid_rag.config.search.models import HybridSearchOptions
from hybrid_rag.config.search.static import load_keyword_collections, resolve_search_options
from hybrid_rag.config.settings import Settings
from hybrid_rag.repositories.mongodb.keyword_source import MongoKeywordSource
from hybrid_rag.repositories.opensearch.vectors_repository import OpenSearchVectorStore
from hybrid_rag.services.embedder.adapter import EmbeddingAdapter
from hybrid_rag.services.ingestion.pipeline import IngestionPipeline
from hybrid_rag.services.search.base import BaseKeywordSource, BaseVectorStore
from hybrid_rag.services.search.hybrid import HybridSearchService
from hybrid_rag.services.search.keyword_search import KeywordSearch

logger = get_logger(__name__)


@dataclass(frozen=True)
class Services:
    embedder: EmbeddingAdapter | None
    vector_store: BaseVectorStore
    keyword_source: BaseKeywordSource
    keyword_search: KeywordSearch
    search: HybridSearchService
    ingestion: IngestionPipeline
    chunk_config: ChunkConfig
    search_options: HybridSearchOptions


def _build_embedder(settings: Settings) -> EmbeddingAdapter | None:
    """An unknown profile or strategy leaves the service running keyword-only."""
    try:
        return EmbeddingAdapter.from_config(resolve_embedding_config(settings.embedding_profile))
    except ValueError as e:
        logger.warning(
            "Embedding adapter not configured; vector search disabled",
            extra={"profile": settings.embedding_profile, "error": str(e)},
        )
        return None


def build_services(
    settings: Settings,
    *,
    vector_store: BaseVectorStore | None = None,
    keyword_source: BaseKeywordSource | None = None,
    embedder: EmbeddingAdapter | None = None,
) -> Services:
    """Wire every service. Collaborators passed in replace the OpenSearch/MongoDB/provider defaults."""
    embedder = embedder if embedder is not None else _build_embedder(settings)
    if embedder is not None and embedder.dimension not in (None, settings.vector_dimension):
        logger.warning(
            "Embedding dimension differs from the vector index dimension",
            extra={"embedding_dimension": embedder.dimension, "vector_dimension": settings.vector_dimension},
        )
    if vector_store is None:
        vector_store = OpenSearchVectorStore(
            index_name=settings.vector_index_name,
            dimension=settings.vector_dimension,
            indexing_config=resolve_indexing_config(settings.indexing_profile),
        )
    keyword_source = keyword_source if keyword_source is not None else MongoKeywordSource()
    chunk_config = resolve_chunking_config(settings.chunking_profile)

    keyword_search = KeywordSearch(keyword_source, load_keyword_collections())
    services = Services(
        embedder=embedder,
        vector_store=vector_store,
        keyword_source=keyword_source,
        keyword_search=keyword_search,
        search=HybridSearchService(vector_store, keyword_search, embedder),
        ingestion=IngestionPipeline(embedder, vector_store, chunk_config),
        chunk_config=chunk_config,
        search_options=resolve_search_options(settings.search_profile),
    )
    logger.info(
        "Services built",
        extra={
            "embedding_model": embedder.model if embedder else None,
            "vector_index": settings.vector_index_name,
            "chunk_strategy": chunk_config.strategy,
            "keyword_collections": [c.name for c in keyword_search.collections],
        },
    )
    return services
