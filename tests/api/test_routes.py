"""HTTP surface: health, chunking, indexing and the three search modes, wired to in-memory fakes."""

from dataclasses import replace
from unittest.mock import AsyncMock, patch

import pytest

from hybrid_rag.repositories.mongodb.base import RepositoryError
from hybrid_rag.services.ingestion.pipeline import IngestionPipeline
from hybrid_rag.services.search.base import VectorStoreError
from hybrid_rag.services.search.hybrid import HybridSearchService
from tests.fakes import FakeVectorStore

DOC = (
    "# Fusion\n\n"
    "Reciprocal rank fusion merges the vector ranking and the keyword ranking.\n\n"
    "# Chunking\n\n"
    "Documents are split at headings before they are embedded."
)


def _swap_services(client, **changes):
    client.app.state.services = replace(client.app.state.services, **changes)


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}

    def test_ready(self, client):
        with (
            patch("hybrid_rag.main.ping_mongo", AsyncMock(return_value={"ok": True})),
            patch("hybrid_rag.main.ping_opensearch", AsyncMock(return_value={"ok": True})),
        ):
            r = client.get("/ready")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_ready_degraded(self, client):
        with (
            patch("hybrid_rag.main.ping_mongo", AsyncMock(return_value={"ok": True})),
            patch(
                "hybrid_rag.main.ping_opensearch",
                AsyncMock(return_value={"ok": False, "error": "connection_failed"}),
            ),
        ):
            r = client.get("/ready")
        assert r.status_code == 503
        body = r.json()
        assert body["status"] == "degraded"
        assert body["opensearch"] == {"ok": False, "error": "connection_failed"}


class TestChunkRoute:
    def test_two_headings(self, client):
        r = client.post(
            "/chunk",
            json={"text": DOC, "strategy": "heading", "min_chunk_size": 0, "overlap_size": 0},
        )
        assert r.status_code == 200
        body = r.json()
        assert body["chunk_count"] == 2
        assert [c["parent_heading"] for c in body["chunks"]] == ["Fusion", "Chunking"]
        assert [c["index"] for c in body["chunks"]] == [0, 1]
        assert body["strategy"] == "heading"

    def test_empty_text(self, client):
        r = client.post("/chunk", json={"text": "   "})
        assert r.status_code == 200
        assert r.json()["chunks"] == []

    def test_unknown_profile(self, client):
        r = client.post("/chunk", json={"text": DOC, "profile": "nope"})
        assert r.status_code == 400
        assert "nope" in r.json()["detail"]

    def test_min_not_below_max(self, client):
        r = client.post("/chunk", json={"text": DOC, "max_chunk_size": 300, "min_chunk_size": 300})
        assert r.status_code == 400

    def test_invalid_strategy(self, client):
        r = client.post("/chunk", json={"text": DOC, "strategy": "tokens"})
        assert r.status_code == 422


class TestIndexRoute:
    def test_index_inline_content(self, client, vector_store):
        r = client.post(
            "/index",
            json={
                "document_id": "doc-1",
                "content": DOC,
                "metadata": {"category": "search"},
                "chunking_profile": "by_heading",
                "min_chunk_size": 0,
            },
        )
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "success"
        assert body["strategy"] == "heading"
        assert body["chunks_created"] == body["vectors_indexed"] == 2
        assert sorted(vector_store.points) == sorted(body["chunk_ids"])
        assert all(p["payload"]["category"] == "search" for p in vector_store.points.values())

    def test_reindex_reports_replaced(self, client):
        first = client.post("/index", json={"document_id": "doc-1", "content": DOC}).json()
        second = client.post("/index", json={"document_id": "doc-1", "content": DOC}).json()
        assert second["chunk_ids"] == first["chunk_ids"]
        assert second["vectors_replaced"] == first["vectors_indexed"]

    def test_empty_content(self, client):
        r = client.post("/index", json={"document_id": "doc-1", "content": ""})
        assert r.status_code == 200
        assert r.json()["status"] == "empty"
        assert r.json()["chunks_created"] == 0

    def test_loads_raw_document(self, client, vector_store):
        raw = {"document_id": "doc-9", "content": DOC}
        with patch("hybrid_rag.controllers.routes.index.get_raw_document", AsyncMock(return_value=raw)):
            r = client.post("/index", json={"document_id": "doc-9"})
        assert r.status_code == 200
        assert r.json()["chunks_created"] >= 1
        assert all(p["payload"]["document_id"] == "doc-9" for p in vector_store.points.values())

    def test_raw_document_missing(self, client):
        with patch("hybrid_rag.controllers.routes.index.get_raw_document", AsyncMock(return_value=None)):
            r = client.post("/index", json={"document_id": "doc-404"})
        assert r.status_code == 404

    def test_raw_document_store_down(self, client):
        with patch(
            "hybrid_rag.controllers.routes.index.get_raw_document",
            AsyncMock(side_effect=RepositoryError("down")),
        ):
            r = client.post("/index", json={"document_id": "doc-1"})
        assert r.status_code == 503

    def test_no_embedder(self, client, vector_store):
        _swap_services(client, embedder=None, ingestion=IngestionPipeline(None, vector_store))
        r = client.post("/index", json={"document_id": "doc-1", "content": DOC})
        assert r.status_code == 503

    def test_bad_overrides(self, client):
        r = client.post("/index", json={"document_id": "doc-1", "content": DOC, "chunking_profile": "nope"})
        assert r.status_code == 400

    def test_delete(self, client, vector_store):
        created = client.post("/index", json={"document_id": "doc-1", "content": DOC}).json()
        r = client.delete("/index/doc-1")
        assert r.status_code == 200
        assert r.json() == {"document_id": "doc-1", "vectors_deleted": created["vectors_indexed"]}
        assert vector_store.points == {}


class TestSearchRoute:
    @pytest.fixture(autouse=True)
    def indexed(self, client):
        client.post(
            "/index",
            json={"document_id": "doc-1", "content": DOC, "chunking_profile": "by_heading", "min_chunk_size": 0},
        )

    def test_hybrid(self, client):
        r = client.post("/search", json={"query": "rank fusion", "limit": 5})
        assert r.status_code == 200
        body = r.json()
        assert body["mode"] == "hybrid"
        assert body["stats"]["vector_result_count"] == 2
        assert body["stats"]["keyword_result_count"] == 2
        assert body["stats"]["combined_result_count"] == len(body["results"]) == 4
        scores = [res["score"] for res in body["results"]]
        assert scores == sorted(scores, reverse=True)
        assert {res["source"] for res in body["results"]} == {"vector", "keyword"}

    def test_hybrid_keyword_only_option(self, client):
        r = client.post("/search", json={"query": "fusion", "use_vector": False})
        body = r.json()
        assert body["stats"]["vector_result_count"] == 0
        assert [res["id"] for res in body["results"]] == ["kb-1", "ctx-1"]

    def test_hybrid_filter_reaches_keyword_source(self, client, keyword_source):
        r = client.post("/search", json={"query": "fusion", "filter": {"category": "search"}})
        assert r.status_code == 200
        assert keyword_source.calls[0][3] == {"category": "search"}

    def test_vector_mode(self, client):
        r = client.post("/search", json={"query": "rank fusion", "mode": "vector", "limit": 1})
        body = r.json()
        assert r.status_code == 200
        assert len(body["results"]) == 1
        hit = body["results"][0]
        assert hit["source"] == "vector"
        assert hit["vector_score"] == hit["score"]
        assert hit["metadata"]["document_id"] == "doc-1"

    def test_keyword_mode(self, client):
        r = client.post("/search", json={"query": "fusion", "mode": "keyword"})
        body = r.json()
        assert [res["id"] for res in body["results"]] == ["kb-1", "ctx-1"]
        assert body["results"][0]["keyword_score"] == body["results"][0]["score"]
        assert body["results"][0]["metadata"]["collection"] == "knowledge_entries"
        assert body["stats"]["keyword_result_count"] == 2

    def test_unknown_profile(self, client):
        r = client.post("/search", json={"query": "fusion", "profile": "nope"})
        assert r.status_code == 400

    def test_empty_query_rejected(self, client):
        assert client.post("/search", json={"query": ""}).status_code == 422

    def test_vector_mode_without_embedder(self, client, vector_store):
        services = client.app.state.services
        _swap_services(client, search=HybridSearchService(vector_store, services.keyword_search, None))
        r = client.post("/search", json={"query": "fusion", "mode": "vector"})
        assert r.status_code == 503

    def test_hybrid_without_embedder_degrades(self, client, vector_store):
        services = client.app.state.services
        _swap_services(client, search=HybridSearchService(vector_store, services.keyword_search, None))
        r = client.post("/search", json={"query": "fusion"})
        assert r.status_code == 200
        assert r.json()["stats"]["vector_result_count"] == 0
        assert len(r.json()["results"]) == 2

    def test_vector_store_failure(self, client):
        services = client.app.state.services
        broken = FakeVectorStore(error=VectorStoreError("k-NN query failed"))
        _swap_services(client, search=HybridSearchService(broken, services.keyword_search, services.embedder))

        assert client.post("/search", json={"query": "fusion", "mode": "vector"}).status_code == 503
        hybrid = client.post("/search", json={"query": "fusion"})
        assert hybrid.status_code == 200
        assert hybrid.json()["stats"]["vector_result_count"] == 0
