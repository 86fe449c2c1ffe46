"""Hybrid retrieval: concurrency, degradation, filtering and the degenerate single-path modes."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from hybrid_rag.config.search.models import HybridSearchOptions
from hybrid_rag.services.embedder.base import EmbeddingUnavailableError
from hybrid_rag.services.search.hybrid import HybridSearchService, fetch_size_for
from hybrid_rag.services.search.models import KeywordResult, SearchResult
from tests.fakes import FakeVectorStore, make_mock_embedder

NO_FLOOR = HybridSearchOptions(min_score=0.0)


def _vector_hits(*ids: str) -> list[SearchResult]:
    return [SearchResult(id=i, score=0.5, content=i) for i in ids]


def _keyword_search(*ids: str, error: Exception | None = None) -> MagicMock:
    ks = MagicMock()
    if error is not None:
        ks.search = AsyncMock(side_effect=error)
    else:
        ks.search = AsyncMock(return_value=[KeywordResult(id=i, rank=1.0, content=i) for i in ids])
    return ks


def _service(store, ks, embedder="default") -> HybridSearchService:
    return HybridSearchService(store, ks, make_mock_embedder() if embedder == "default" else embedder)


async def test_fuses_both_paths():
    service = _service(FakeVectorStore(results=_vector_hits("v1", "v2")), _keyword_search("v2", "k1"))
    response = await service.search("rank fusion", NO_FLOOR)

    assert [r.id for r in response.results] == ["v2", "v1", "k1"]
    assert response.results[0].source == "both"
    assert response.query == "rank fusion"
    assert response.stats.vector_result_count == 2
    assert response.stats.keyword_result_count == 2
    assert response.stats.combined_result_count == 3
    assert response.stats.search_time_ms >= 0


async def test_default_min_score_filters_rrf_scores():
    service = _service(FakeVectorStore(results=_vector_hits("v1")), _keyword_search("k1"))
    response = await service.search("rank fusion")

    assert response.results == []
    assert response.stats.vector_result_count == 1
    assert response.stats.combined_result_count == 0


async def test_limit_truncates_after_fusion():
    service = _service(FakeVectorStore(results=_vector_hits("a", "b", "c")), _keyword_search("d", "e"))
    response = await service.search("query terms", HybridSearchOptions(min_score=0.0, limit=2))

    assert [r.id for r in response.results] == ["a", "b"]
    assert response.stats.combined_result_count == 2


@pytest.mark.parametrize("limit, expected", [(5, 15), (10, 30), (20, 50), (40, 50)])
async def test_fetch_size(limit, expected):
    store = FakeVectorStore(results=[])
    ks = _keyword_search()
    await _service(store, ks).search("query terms", HybridSearchOptions(limit=limit, filter={"lang": "en"}))

    assert fetch_size_for(limit) == expected
    assert store.search_calls == [(expected, {"lang": "en"})]
    ks.search.assert_awaited_once_with("query terms", expected, {"lang": "en"})


async def test_vector_failure_degrades_to_keyword_results():
    service = _service(FakeVectorStore(error=RuntimeError("index down")), _keyword_search("k1"))
    response = await service.search("query terms", NO_FLOOR)

    assert [r.id for r in response.results] == ["k1"]
    assert response.results[0].source == "keyword"
    assert response.stats.vector_result_count == 0


async def test_keyword_failure_degrades_to_vector_results():
    service = _service(FakeVectorStore(results=_vector_hits("v1")), _keyword_search(error=RuntimeError("db down")))
    response = await service.search("query terms", NO_FLOOR)

    assert [r.id for r in response.results] == ["v1"]
    assert response.stats.keyword_result_count == 0


async def test_embedding_failure_degrades():
    embedder = make_mock_embedder()
    embedder.embed = AsyncMock(side_effect=RuntimeError("provider down"))
    store = FakeVectorStore(results=_vector_hits("v1"))
    response = await _service(store, _keyword_search("k1"), embedder).search("query terms", NO_FLOOR)

    assert [r.id for r in response.results] == ["k1"]
    assert store.search_calls == []


async def test_without_embedder_vector_path_is_skipped():
    store = FakeVectorStore(results=_vector_hits("v1"))
    service = _service(store, _keyword_search("k1"), embedder=None)
    response = await service.search("query terms", NO_FLOOR)

    assert not service.is_available()
    assert store.search_calls == []
    assert [r.id for r in response.results] == ["k1"]


async def test_paths_can_be_disabled():
    store = FakeVectorStore(results=_vector_hits("v1"))
    ks = _keyword_search("k1")
    response = await _service(store, ks).search(
        "query terms", HybridSearchOptions(min_score=0.0, use_vector=False, use_keyword=False)
    )

    assert response.results == []
    assert store.search_calls == []
    ks.search.assert_not_awaited()


async def test_paths_run_concurrently():
    keyword_started = asyncio.Event()

    class WaitingStore(FakeVectorStore):
        async def search(self, vector, k, filter=None):
            # Completes only if the keyword path is already running
            await keyword_started.wait()
            return _vector_hits("v1")

    async def keyword(query, limit, filter=None):
        keyword_started.set()
        return [KeywordResult(id="k1", rank=1.0)]

    ks = MagicMock()
    ks.search = keyword
    response = await asyncio.wait_for(_service(WaitingStore(), ks).search("query terms", NO_FLOOR), timeout=2)

    assert {r.id for r in response.results} == {"v1", "k1"}


async def test_vector_search_requires_embedder():
    service = _service(FakeVectorStore(), _keyword_search(), embedder=None)
    with pytest.raises(EmbeddingUnavailableError):
        await service.vector_search("query terms")


async def test_vector_search_queries_store_directly():
    store = FakeVectorStore(results=_vector_hits("v1", "v2", "v3"))
    hits = await _service(store, _keyword_search()).vector_search("query terms", limit=2, filter={"a": 1})

    assert [h.id for h in hits] == ["v1", "v2"]
    assert store.search_calls == [(2, {"a": 1})]


async def test_keyword_search_only_delegates():
    ks = _keyword_search("k1")
    hits = await _service(FakeVectorStore(), ks).keyword_search_only("query terms", limit=4)

    assert [h.id for h in hits] == ["k1"]
    ks.search.assert_awaited_once_with("query terms", 4, None)
