"""Unit tests for DiagnosisService orchestration."""

from unittest.mock import MagicMock

import pytest

from llmo.core.domain import FailureReason
from llmo.core.domain.exceptions import (
    FetchHTTPError,
    InsufficientContentError,
    NonHTMLContentError,
    StorageError,
)
from llmo.core.services.analysis_engine import AnalysisEngine
from llmo.core.services.diagnosis_service import GENERIC_FAILURE_MESSAGE, DiagnosisService
from llmo.core.services.embedding_service import EmbeddingService

pytestmark = pytest.mark.unit

URL = "https://example.com/rag"
QUERY = "What is RAG?"


@pytest.fixture
def build_service(make_fetcher, make_embedding, make_backend):
    """Build a service from fakes; returns (service, fetcher, embedding, backends)."""

    def _build(html, backends=None, store=None, embedding=None):
        fetcher = make_fetcher(html)
        embedding = embedding or make_embedding()
        backends = backends if backends is not None else [make_backend("model-a")]
        service = DiagnosisService(
            fetcher=fetcher,
            embeddings=EmbeddingService(embedding),
            engine=AnalysisEngine(backends),
            store=store,
        )
        return service, fetcher, embedding, backends

    return _build


class TestRun:
    """Tests for the raising pipeline."""

    def test_successful_diagnosis(self, build_service, article_html):
        store = MagicMock()
        store.persist.return_value = 1
        service, fetcher, embedding, backends = build_service(article_html, store=store)

        report = service.run(URL, QUERY)

        assert fetcher.calls == [URL]
        assert len(embedding.calls) == 2
        assert QUERY in embedding.calls
        assert backends[0].calls == 1
        assert report.page_title == "What is RAG?"
        assert report.analysis.overall_score == 72
        assert -1.0 <= report.similarity.score <= 1.0
        assert report.is_spa is False

        record = store.persist.call_args.args[0]
        assert record.url == URL
        assert record.analysis_source == "model:model-a"
        assert record.content_embedding and record.query_embedding

    def test_thin_static_page_stops_before_embedding(self, build_service, thin_html):
        service, _, embedding, backends = build_service(thin_html)

        with pytest.raises(InsufficientContentError) as exc_info:
            service.run(URL, QUERY)

        assert exc_info.value.is_spa is False
        assert exc_info.value.min_length == 100
        assert embedding.calls == []
        assert backends[0].calls == 0

    def test_spa_page_uses_lower_threshold(self, build_service):
        html = '<html><head><title>App</title></head><body><div id="app"></div></body></html>'
        service, _, embedding, _ = build_service(html)

        with pytest.raises(InsufficientContentError) as exc_info:
            service.run(URL, QUERY)

        assert exc_info.value.is_spa is True
        assert exc_info.value.min_length == 50
        assert exc_info.value.user_message == InsufficientContentError.spa_user_message
        assert embedding.calls == []

    def test_spa_page_with_metadata_is_analysed(self, build_service, spa_html):
        service, _, embedding, _ = build_service(spa_html)

        report = service.run(URL, QUERY)

        assert report.is_spa is True
        assert len(embedding.calls) == 2

    def test_all_backends_failing_falls_back_to_heuristic(
        self, build_service, article_html, make_backend
    ):
        store = MagicMock()
        backends = [
            make_backend("a", error=RuntimeError("quota exceeded")),
            make_backend("b", error=RuntimeError("404 model not found")),
        ]
        service, _, _, _ = build_service(article_html, backends=backends, store=store)

        report = service.run(URL, QUERY)

        assert report.analysis.summary
        assert report.analysis.summary.endswith("(Simplified analysis)")
        assert 0 <= report.analysis.overall_score <= 100
        assert store.persist.call_args.args[0].analysis_source == "heuristic"

    def test_preview_is_truncated(self, build_service):
        html = "<html><body><article>" + "word " * 300 + "</article></body></html>"
        service, _, _, _ = build_service(html)

        report = service.run(URL, QUERY)

        assert len(report.content_preview) == 503
        assert report.content_preview.endswith("...")


class TestDiagnose:
    """Tests for the never-raising outcome wrapper."""

    def test_success_outcome(self, build_service, article_html):
        service, _, _, _ = build_service(article_html)

        outcome = service.diagnose(URL, QUERY)

        assert outcome.success is True
        assert outcome.report is not None
        assert outcome.report.to_dict()["isSPA"] is False

    def test_insufficient_content_outcome(self, build_service, thin_html):
        service, _, _, _ = build_service(thin_html)

        outcome = service.diagnose(URL, QUERY)

        assert outcome.success is False
        assert outcome.reason is FailureReason.INSUFFICIENT_CONTENT
        assert outcome.message == InsufficientContentError.user_message

    @pytest.mark.parametrize(
        "error",
        [FetchHTTPError("HTTP 404"), NonHTMLContentError("application/pdf")],
    )
    def test_fetch_failure_outcome(self, build_service, article_html, error):
        service, _, _, _ = build_service(article_html)
        service.fetcher = MagicMock()
        service.fetcher.fetch.side_effect = error

        outcome = service.diagnose(URL, QUERY)

        assert outcome.reason is FailureReason.FETCH_FAILED
        assert outcome.message == error.user_message

    def test_embedding_failure_outcome(self, build_service, article_html, make_embedding):
        service, _, _, backends = build_service(
            article_html, embedding=make_embedding(configured=False)
        )

        outcome = service.diagnose(URL, QUERY)

        assert outcome.reason is FailureReason.EMBEDDING_FAILED
        assert "not configured" in outcome.message
        assert backends[0].calls == 0

    def test_storage_failure_is_unknown(self, build_service, article_html):
        store = MagicMock()
        store.persist.side_effect = StorageError("disk full")
        service, _, _, _ = build_service(article_html, store=store)

        outcome = service.diagnose(URL, QUERY)

        assert outcome.reason is FailureReason.UNKNOWN
        assert outcome.message == GENERIC_FAILURE_MESSAGE

    def test_unexpected_error_is_unknown(self, build_service, article_html):
        service, _, _, _ = build_service(article_html)
        service.parser = MagicMock()
        service.parser.parse.side_effect = KeyError("boom")

        outcome = service.diagnose(URL, QUERY)

        assert outcome.success is False
        assert outcome.reason is FailureReason.UNKNOWN
        assert "boom" not in outcome.message


class TestHistory:
    def test_history_without_store(self, build_service, article_html):
        service, _, _, _ = build_service(article_html)
        assert service.history() == []

    def test_history_delegates_to_store(self, build_service, article_html):
        store = MagicMock()
        store.recent.return_value = ["entry"]
        service, _, _, _ = build_service(article_html, store=store)

        assert service.history(5) == ["entry"]
        store.recent.assert_called_once_with(5)
