"""Shared fixtures: fakes for the storage collaborators and a TestClient wired to them."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from hybrid_rag.config.settings import Settings
from hybrid_rag.services.container import build_services
from hybrid_rag.services.embedder.adapter import EmbeddingAdapter
from tests.fakes import FakeKeywordSource, FakeVectorStore, make_mock_embedder


@pytest.fixture
def mock_embedder() -> EmbeddingAdapter:
    return make_mock_embedder()


@pytest.fixture
def vector_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture
def keyword_source() -> FakeKeywordSource:
    return FakeKeywordSource(
        {
            "knowledge_entries": [
                {
                    "id": "kb-1",
                    "title": "Reciprocal rank fusion",
                    "content": "Fusion merges vector and keyword rankings by rank position.",
                    "category": "search",
                    "tags": ["rrf"],
                    "source_type": "manual",
                },
                {
                    "id": "kb-2",
                    "title": "Chunking guide",
                    "content": "Split markdown documents by headings before embedding them.",
                    "category": "ingestion",
                    "tags": ["chunking"],
                    "source_type": "manual",
                },
            ],
            "shared_context": [
                {
                    "id": "ctx-1",
                    "title": "Agent notes",
                    "content": "The fusion step ran after both searches finished.",
                    "context_type": "note",
                    "source_agent": "planner",
                },
            ],
        }
    )


@pytest.fixture
def services(vector_store, keyword_source, mock_embedder):
    return build_services(
        Settings(), vector_store=vector_store, keyword_source=keyword_source, embedder=mock_embedder
    )


@pytest.fixture
def client(services):
    """TestClient whose lifespan wires the in-memory services instead of OpenSearch and MongoDB."""
    from hybrid_rag.main import app

    with patch("hybrid_rag.main.build_services", return_value=services):
        with TestClient(app) as c:
            yield c
