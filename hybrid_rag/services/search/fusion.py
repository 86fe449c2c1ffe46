"""
Weighted Reciprocal Rank Fusion (Cormack et al., 2009):

    score(d) = sum over rankers i of  weight_i / (rrf_k + rank_i(d) + 1)

with zero-based ranks. Only rank positions are used, so cosine similarities and heuristic
keyword scores never need calibrating against each other. Pure; no IO.
"""

from hybrid_rag.services.search.models import HybridSearchResult, KeywordResult, SearchResult


def rrf_contribution(rank: int, weight: float, rrf_k: int) -> float:
    return weight / (rrf_k + rank + 1)


def reciprocal_rank_fusion(
    vector_results: list[SearchResult],
    keyword_results: list[KeywordResult],
    *,
    vector_weight: float,
    keyword_weight: float,
    rrf_k: int,
) -> list[HybridSearchResult]:
    """
    Fuse the two rankings by id. Ids found in both lists get the sum of both contributions and
    source "both"; content and metadata come from the vector hit. An id repeated within one list
    counts once, at its best rank. Returned best first; ties keep first-seen order.
    """
    fused: dict[str, HybridSearchResult] = {}

    seen: set[str] = set()
    for rank, hit in enumerate(vector_results):
        if hit.id in seen:
            continue
        seen.add(hit.id)
        fused[hit.id] = HybridSearchResult(
            id=hit.id,
            content=hit.content,
            score=rrf_contribution(rank, vector_weight, rrf_k),
            vector_score=hit.score,
            metadata=dict(hit.metadata),
            source="vector",
        )

    seen = set()
    for rank, hit in enumerate(keyword_results):
        if hit.id in seen:
            continue
        seen.add(hit.id)
        contribution = rrf_contribution(rank, keyword_weight, rrf_k)
        existing = fused.get(hit.id)
        if existing is not None:
            fused[hit.id] = existing.model_copy(
                update={"score": existing.score + contribution, "keyword_score": hit.rank, "source": "both"}
            )
        else:
            fused[hit.id] = HybridSearchResult(
                id=hit.id,
                content=hit.content,
                score=contribution,
                keyword_score=hit.rank,
                metadata=dict(hit.metadata),
                source="keyword",
            )

    return sorted(fused.values(), key=lambda r: r.score, reverse=True)
