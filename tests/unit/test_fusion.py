"""Weighted reciprocal rank fusion."""

import pytest

from hybrid_rag.services.search.fusion import reciprocal_rank_fusion
from hybrid_rag.services.search.models import KeywordResult, SearchResult

WEIGHTS = {"vector_weight": 0.7, "keyword_weight": 0.3, "rrf_k": 60}


def _vec(*ids: str) -> list[SearchResult]:
    return [SearchResult(id=i, score=0.9 - n * 0.1, content=f"v:{i}", metadata={"from": "vector"}) for n, i in enumerate(ids)]


def _kw(*ids: str) -> list[KeywordResult]:
    return [KeywordResult(id=i, rank=3.0 - n, content=f"k:{i}", metadata={"from": "keyword"}) for n, i in enumerate(ids)]


def test_overlapping_id_ranks_first_with_both_sources():
    fused = reciprocal_rank_fusion(_vec("v1", "v2"), _kw("v2", "k1"), **WEIGHTS)
    by_id = {r.id: r for r in fused}

    assert [r.id for r in fused] == ["v2", "v1", "k1"]
    assert by_id["v2"].source == "both"
    assert by_id["v1"].source == "vector"
    assert by_id["k1"].source == "keyword"
    assert by_id["v2"].score == pytest.approx(0.7 / 62 + 0.3 / 61)
    assert by_id["v1"].score == pytest.approx(0.7 / 61)
    assert by_id["k1"].score == pytest.approx(0.3 / 62)


def test_both_keeps_vector_content_and_both_raw_scores():
    fused = reciprocal_rank_fusion(_vec("a"), _kw("a"), **WEIGHTS)

    assert len(fused) == 1
    assert fused[0].content == "v:a"
    assert fused[0].metadata == {"from": "vector"}
    assert fused[0].vector_score == pytest.approx(0.9)
    assert fused[0].keyword_score == pytest.approx(3.0)


def test_each_id_appears_once():
    ids = [f"d{i}" for i in range(10)]
    fused = reciprocal_rank_fusion(_vec(*ids), _kw(*reversed(ids)), **WEIGHTS)

    assert sorted(r.id for r in fused) == sorted(ids)
    assert all(r.source == "both" for r in fused)


def test_higher_rank_never_scores_lower():
    fused = reciprocal_rank_fusion(_vec("a", "b", "c", "d"), [], **WEIGHTS)
    scores = [r.score for r in fused]

    assert [r.id for r in fused] == ["a", "b", "c", "d"]
    assert scores == sorted(scores, reverse=True)
    assert len(set(scores)) == 4


def test_repeated_id_counts_at_best_rank_only():
    fused = reciprocal_rank_fusion(_vec("a", "b", "a"), [], **WEIGHTS)

    assert [r.id for r in fused] == ["a", "b"]
    assert fused[0].score == pytest.approx(0.7 / 61)


def test_ties_keep_first_seen_order():
    fused = reciprocal_rank_fusion(_vec("a"), _kw("b"), vector_weight=0.5, keyword_weight=0.5, rrf_k=60)
    assert [r.id for r in fused] == ["a", "b"]


def test_empty_inputs():
    assert reciprocal_rank_fusion([], [], **WEIGHTS) == []
