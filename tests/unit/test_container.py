"""Service wiring from settings and profiles."""

from hybrid_rag.config.chunking.static import resolve_chunking_config
from hybrid_rag.config.settings import Settings
from hybrid_rag.services.container import build_services
from tests.fakes import FakeKeywordSource, FakeVectorStore, make_mock_embedder


def test_injected_collaborators_are_used():
    store, source, embedder = FakeVectorStore(), FakeKeywordSource(), make_mock_embedder()
    services = build_services(Settings(_env_file=None), vector_store=store, keyword_source=source, embedder=embedder)

    assert services.vector_store is store
    assert services.keyword_source is source
    assert services.embedder is embedder
    assert services.search.is_available()
    assert services.chunk_config == resolve_chunking_config("active")
    assert [c.name for c in services.keyword_search.collections] == ["knowledge_entries", "shared_context"]
    assert services.search_options.min_score == 0.0


def test_unknown_embedding_profile_disables_vector_search():
    services = build_services(
        Settings(_env_file=None, embedding_profile="nope"),
        vector_store=FakeVectorStore(),
        keyword_source=FakeKeywordSource(),
    )

    assert services.embedder is None
    assert not services.search.is_available()


def test_mock_profile_builds_embedder():
    services = build_services(
        Settings(_env_file=None, embedding_profile="mock"),
        vector_store=FakeVectorStore(),
        keyword_source=FakeKeywordSource(),
    )

    assert services.embedder.model == "mock-embedding-1536"
