"""
Async create-or-verify of the k-NN index that holds chunk vectors and their payload.
Supports cosine, L2, and dot_product similarity and HNSW tuning.
No business logic beyond index definition and mapping.
"""

from typing import Any

from opensearchpy import AsyncOpenSearch
from opensearchpy.exceptions import OpenSearchException, RequestError

from hybrid_rag.config.indexing.models import IndexingConfig
from hybrid_rag.config.logging import get_logger
from hybrid_rag.services.search.base import VectorStoreError

logger = get_logger(__name__)

# OpenSearch k-NN space_type per similarity
SIMILARITY_TO_SPACE_TYPE = {
    "cosine": "cosinesimil",
    "l2": "l2",
    "dot_product": "innerproduct",
}

VECTOR_FIELD_NAME = "embedding_vector"


def _space_type(similarity: str) -> str:
    st = SIMILARITY_TO_SPACE_TYPE.get(similarity)
    if st is None:
        raise ValueError(f"Unsupported similarity: {similarity!r}. Use cosine, l2, or dot_product.")
    return st


def build_index_body(dimension: int, config: IndexingConfig) -> dict[str, Any]:
    """
    Build index settings and mappings for k-NN search over chunk payloads.
    The lucene engine is used so filters are applied during the k-NN search, not after it.
    String payload fields without an explicit mapping are indexed as keywords so they
    can be matched exactly by term filters.
    """
    space = _space_type(config.similarity)
    hnsw = config.hnsw_config
    # ef_search is a query-time parameter
    params: dict[str, Any] = {
        "ef_construction": hnsw.ef_construction,
        "m": hnsw.m,
    }

    vector_prop: dict[str, Any] = {
        "type": "knn_vector",
        "dimension": dimension,
        "method": {
            "name": "hnsw",
            "space_type": space,
            "engine": "lucene",
            "parameters": params,
        },
    }

    properties: dict[str, Any] = {
        VECTOR_FIELD_NAME: vector_prop,
        "content": {"type": "text"},
        "document_id": {"type": "keyword"},
        "chunk_index": {"type": "integer"},
        "chunk_type": {"type": "keyword"},
        "parent_heading": {"type": "text", "fields": {"keyword": {"type": "keyword", "ignore_above": 512}}},
        "heading_level": {"type": "integer"},
        "has_code": {"type": "boolean"},
        "code_language": {"type": "keyword"},
        "start_offset": {"type": "integer"},
        "end_offset": {"type": "integer"},
        "token_count": {"type": "integer"},
        "chunk_hash": {"type": "keyword"},
        "indexed_at": {"type": "date"},
    }

    return {
        "settings": {
            "index": {
                "knn": True,
                "number_of_shards": config.index_settings.get("number_of_shards", 1),
                "number_of_replicas": config.index_settings.get("number_of_replicas", 1),
            }
        },
        "mappings": {
            "dynamic_templates": [
                {"strings_as_keywords": {"match_mapping_type": "string", "mapping": {"type": "keyword"}}}
            ],
            "properties": properties,
        },
    }


def _error_reason(e: OpenSearchException) -> str:
    info = getattr(e, "info", None)
    if isinstance(info, dict):
        error_info = info.get("error", {})
        if isinstance(error_info, dict) and "reason" in error_info:
            return error_info["reason"]
    return str(e)


async def create_index_if_not_exists(
    client: AsyncOpenSearch,
    index_name: str,
    dimension: int,
    config: IndexingConfig,
) -> bool:
    """
    Create the index if it does not exist. If it exists, verify its vector dimension.
    Returns True if the index was created, False if it already existed.
    Raises VectorStoreError on a dimension mismatch or when OpenSearch rejects the request;
    existing vectors are never dropped implicitly.
    """
    try:
        if await client.indices.exists(index=index_name):
            mapping = await client.indices.get_mapping(index=index_name)
            props = mapping.get(index_name, {}).get("mappings", {}).get("properties", {})
            existing_dimension = props.get(VECTOR_FIELD_NAME, {}).get("dimension")
            if existing_dimension is not None and existing_dimension != dimension:
                logger.error(
                    "Index dimension mismatch",
                    extra={
                        "index_name": index_name,
                        "existing_dimension": existing_dimension,
                        "expected_dimension": dimension,
                    },
                )
                raise VectorStoreError(
                    f"Index '{index_name}' has dimension {existing_dimension}, expected {dimension}"
                )
            logger.debug("Index already exists", extra={"index_name": index_name, "dimension": dimension})
            return False

        await client.indices.create(index=index_name, body=build_index_body(dimension, config))
    except RequestError as e:
        # Another worker created it between exists() and create()
        if "resource_already_exists_exception" in str(getattr(e, "error", "")):
            return False
        reason = _error_reason(e)
        logger.error(
            "Failed to create OpenSearch index",
            extra={"index_name": index_name, "error": reason, "error_type": type(e).__name__},
        )
        raise VectorStoreError(f"Failed to create index '{index_name}': {reason}") from e
    except OpenSearchException as e:
        logger.error(
            "OpenSearch error during index creation",
            extra={"index_name": index_name, "error": str(e), "error_type": type(e).__name__},
        )
        raise VectorStoreError(f"OpenSearch error while creating index '{index_name}'") from e

    logger.info(
        "Index created",
        extra={"index_name": index_name, "dimension": dimension, "similarity": config.similarity},
    )
    return True
