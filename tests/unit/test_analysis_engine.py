"""Unit tests for the analysis engine and its fallback walk."""

import pytest

from llmo.adapters.outbound.llm import GeminiBackend
from llmo.core.domain import SimilarityScore
from llmo.core.domain.exceptions import (
    AllBackendsFailedError,
    AnalysisParseError,
    BackendInvocationError,
    MissingAPIKeyError,
)
from llmo.core.services.analysis_engine import (
    AnalysisEngine,
    EngineState,
    FailureAction,
    build_prompt,
    classify_failure,
    first_json_object,
    parse_analysis,
)

pytestmark = pytest.mark.unit

SIMILARITY = SimilarityScore(score=0.6)


class RecordingBackend:
    """Backend that appends its name to a shared call log."""

    def __init__(self, name, log, response=None, error=None):
        self.name = name
        self.log = log
        self.response = response
        self.error = error

    def invoke(self, prompt):
        self.log.append(self.name)
        if self.error is not None:
            raise self.error
        return self.response


class TestClassifyFailure:
    """Tests for the skip/fatal policy."""

    @pytest.mark.parametrize(
        "message",
        [
            "429 Too Many Requests",
            "Quota exceeded for metric generate_content",
            "RESOURCE_EXHAUSTED",
            "Rate limit reached",
            "models/gemini-x is not found for API version v1beta",
            "404 NOT_FOUND",
        ],
    )
    def test_skippable(self, message):
        assert classify_failure(RuntimeError(message)) is FailureAction.SKIP

    def test_other_errors_are_fatal(self):
        assert classify_failure(RuntimeError("invalid API key")) is FailureAction.FATAL

    def test_skip_on_any_error(self):
        action = classify_failure(RuntimeError("invalid API key"), skip_on_any_error=True)
        assert action is FailureAction.SKIP

    def test_missing_credentials_skip(self):
        action = classify_failure(MissingAPIKeyError("Google API key not set"))
        assert action is FailureAction.SKIP


class TestParseAnalysis:
    """Tests for extracting the JSON verdict from model output."""

    def test_extracts_json_surrounded_by_prose(self, make_backend):
        result = parse_analysis(make_backend("x").response)

        assert result.overall_score == 72
        assert result.structured_data.score == 40
        assert len(result.improvements) == 3

    def test_trailing_prose_with_braces(self, make_backend):
        text = make_backend("x").response + "\nWant details on {structuredData}? Ask me {anything}."

        result = parse_analysis(text)

        assert result.overall_score == 72

    def test_leading_braces_that_are_not_json(self, make_backend):
        text = "Scores use the {0-100} scale.\n" + make_backend("x").response

        assert parse_analysis(text).overall_score == 72

    def test_first_object_wins(self):
        assert first_json_object('noise {"a": 1} more {"b": 2}') == {"a": 1}
        assert first_json_object("[1, 2] {oops") is None

    def test_clamps_out_of_range_scores(self):
        text = (
            '{"overallScore": 130, "comprehensiveness": {"score": -5, "feedback": ""},'
            ' "structuredData": {"score": 87.6, "feedback": ""},'
            ' "primarySource": {"score": 50, "feedback": ""}, "summary": "s"}'
        )

        result = parse_analysis(text)

        assert result.overall_score == 100
        assert result.comprehensiveness.score == 0
        assert result.structured_data.score == 88
        assert result.improvements == []

    @pytest.mark.parametrize(
        "text",
        ["no json here", "", "{broken json}", '{"overallScore": 50}'],
    )
    def test_invalid_responses_raise(self, text):
        with pytest.raises(AnalysisParseError):
            parse_analysis(text)


class TestBuildPrompt:
    def test_prompt_contains_page_fields(self, sample_document):
        prompt = build_prompt(sample_document, "What is RAG?", SIMILARITY, "German")

        assert "What is RAG?" in prompt
        assert sample_document.description in prompt
        assert "How retrieval works" in prompt
        assert "Present" in prompt
        assert f"{SIMILARITY.percentage}%" in prompt
        assert "German" in prompt
        assert '"overallScore"' in prompt

    def test_content_is_cut(self, sample_document):
        from dataclasses import replace

        long_document = replace(sample_document, main_content="z" * 5000)

        prompt = build_prompt(long_document, "q", SIMILARITY)

        assert "z" * 3000 in prompt
        assert "z" * 3001 not in prompt


class TestAnalysisEngine:
    """Tests for the ordered fallback walk."""

    def test_quota_then_success_uses_second_backend(self, sample_document, make_backend):
        log = []
        a = RecordingBackend("A", log, error=BackendInvocationError("429 quota exceeded"))
        b = RecordingBackend("B", log, response=make_backend("x").response)

        result = AnalysisEngine([a, b]).analyze(sample_document, "q", SIMILARITY)

        assert log == ["A", "B"]
        assert result.backend == "B"
        assert result.state is EngineState.SUCCEEDED
        assert result.analysis.overall_score == 72
        assert [attempt.succeeded for attempt in result.attempts] == [False, True]

    def test_first_success_stops_the_walk(self, sample_document, make_backend):
        first = make_backend("A")
        second = make_backend("B")

        result = AnalysisEngine([first, second]).analyze(sample_document, "q", SIMILARITY)

        assert result.backend == "A"
        assert first.calls == 1
        assert second.calls == 0

    def test_not_found_then_quota_fails_all(self, sample_document):
        log = []
        a = RecordingBackend("A", log, error=RuntimeError("model not found"))
        b = RecordingBackend("B", log, error=RuntimeError("quota exceeded"))

        with pytest.raises(AllBackendsFailedError) as exc_info:
            AnalysisEngine([a, b]).analyze(sample_document, "q", SIMILARITY)

        assert log == ["A", "B"]
        assert exc_info.value.extra_context["state"] == EngineState.ALL_FAILED.value
        assert str(exc_info.value.cause) == "quota exceeded"

    def test_fatal_error_stops_immediately(self, sample_document, make_backend):
        fatal = make_backend("A", error=RuntimeError("permission denied"))
        never = make_backend("B")

        with pytest.raises(AllBackendsFailedError):
            AnalysisEngine([fatal, never]).analyze(sample_document, "q", SIMILARITY)

        assert never.calls == 0

    def test_unparseable_response_is_fatal_by_default(self, sample_document, make_backend):
        garbled = make_backend("A", response="I cannot answer that.")
        fallback = make_backend("B")

        with pytest.raises(AllBackendsFailedError):
            AnalysisEngine([garbled, fallback]).analyze(sample_document, "q", SIMILARITY)

        assert fallback.calls == 0

    def test_skip_on_any_error_continues(self, sample_document, make_backend):
        garbled = make_backend("A", response="I cannot answer that.")
        fallback = make_backend("B")

        engine = AnalysisEngine([garbled, fallback], skip_on_any_error=True)
        result = engine.analyze(sample_document, "q", SIMILARITY)

        assert result.backend == "B"

    def test_no_backends(self, sample_document):
        with pytest.raises(AllBackendsFailedError, match="No model backends configured"):
            AnalysisEngine([]).analyze(sample_document, "q", SIMILARITY)

    def test_backend_without_key_is_skipped(self, sample_document, make_backend):
        unkeyed = GeminiBackend(api_key="", model="gemini-2.0-flash")
        configured = make_backend("openai:gpt-4o-mini")

        result = AnalysisEngine([unkeyed, configured]).analyze(sample_document, "q", SIMILARITY)

        assert result.backend == "openai:gpt-4o-mini"
        assert configured.calls == 1
        assert result.attempts[0].action is FailureAction.SKIP
