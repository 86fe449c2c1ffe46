"""Unit tests for overlap injection, small-chunk merging and reindexing."""

from hybrid_rag.services.chunking.models import Chunk
from hybrid_rag.services.chunking.postprocess import add_overlap, merge_small_chunks, overlap_prefix, reindex


def _chunks(*contents: str, **fields) -> list[Chunk]:
    return [Chunk(content=c, index=i, **fields) for i, c in enumerate(contents)]


class TestOverlapPrefix:
    def test_moves_past_cut_word(self):
        assert overlap_prefix("the quick brown fox", 7) == "fox"

    def test_keeps_tail_starting_on_word_boundary(self):
        assert overlap_prefix("hello world", 5) == "world"

    def test_short_previous_is_used_whole(self):
        assert overlap_prefix("abc", 10) == "abc"

    def test_zero_size(self):
        assert overlap_prefix("anything", 0) == ""


class TestAddOverlap:
    def test_prefixes_every_chunk_but_first(self):
        out = add_overlap(_chunks("First chunk here", "Second"), 4)

        assert out[0].content == "First chunk here"
        assert out[1].content == "here... Second"

    def test_idempotent(self):
        once = add_overlap(_chunks("First chunk here", "Second", "Third one"), 4)
        twice = add_overlap(once, 4)
        assert [c.content for c in twice] == [c.content for c in once]

    def test_idempotent_when_middle_chunk_is_shorter_than_overlap(self):
        once = add_overlap(_chunks("Alpha beta", "Go", "Third"), 10)
        twice = add_overlap(once, 10)

        assert [c.content for c in once] == ["Alpha beta", "Alpha beta... Go", "Go... Third"]
        assert [c.content for c in twice] == [c.content for c in once]

    def test_idempotent_over_a_run_of_tiny_chunks(self):
        once = add_overlap(_chunks("A", "B", "C", "D"), 10)
        assert [c.content for c in add_overlap(once, 10)] == [c.content for c in once]

    def test_single_chunk_untouched(self):
        assert add_overlap(_chunks("only"), 10)[0].content == "only"


class TestMergeSmallChunks:
    def test_small_chunks_merge_until_large_chunk(self):
        out = merge_small_chunks(_chunks("aa", "bb", "c" * 10), 5)
        assert [c.content for c in out] == ["aa\n\nbb", "c" * 10]

    def test_trailing_small_chunk_joins_previous(self):
        out = merge_small_chunks(_chunks("c" * 10, "aa"), 5)
        assert [c.content for c in out] == ["c" * 10 + "\n\naa"]

    def test_merge_never_exceeds_max_size(self):
        out = merge_small_chunks(_chunks("aaaa", "bbbb"), 5, max_size=8)
        assert [c.content for c in out] == ["aaaa", "bbbb"]

    def test_bound_is_three_times_min(self):
        out = merge_small_chunks(_chunks("aaa", "bbb", "ccc", "ddd", "e" * 10), 4)
        # the buffer reaches 13 characters, so adding "ddd" would pass 3 * 4
        assert [c.content for c in out] == ["aaa\n\nbbb\n\nccc", "ddd", "e" * 10]

    def test_successor_reaching_min_is_still_absorbed_under_bound(self):
        out = merge_small_chunks(_chunks("aa", "bbbbbb", "c" * 20), 5)
        assert [c.content for c in out] == ["aa\n\nbbbbbb", "c" * 20]

    def test_has_code_is_or_combined(self):
        chunks = [Chunk(content="x", index=0, has_code=True, code_language="py"), Chunk(content="y", index=1)]
        merged = merge_small_chunks(chunks, 5)

        assert len(merged) == 1
        assert merged[0].has_code
        assert merged[0].code_language == "py"

    def test_zero_min_disables_merging(self):
        out = merge_small_chunks(_chunks("a", "b"), 0)
        assert [c.content for c in out] == ["a", "b"]


def test_reindex_assigns_sequential_indices():
    chunks = [Chunk(content="a", index=4), Chunk(content="b", index=9)]
    assert [c.index for c in reindex(chunks)] == [0, 1]
