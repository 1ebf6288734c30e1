"""Unit tests for the Typer CLI."""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from llmo.adapters.inbound.cli import commands
from llmo.core.domain import (
    DiagnosisOutcome,
    DiagnosisReport,
    FailureReason,
    HistoryEntry,
    SimilarityScore,
)
from llmo.core.domain.scoring import score_color, score_label

pytestmark = pytest.mark.unit

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_settings(monkeypatch):
    """Configure credentials and keep the CLI off disk and off the log handlers."""
    monkeypatch.setattr(commands.settings, "google_api_key", "test-key")
    monkeypatch.setattr(commands.settings, "embedding_provider", "gemini")
    monkeypatch.setattr(commands.settings, "store_backend", "none")
    monkeypatch.setattr(commands, "setup_logging", MagicMock())


@pytest.fixture
def report(sample_analysis):
    return DiagnosisReport(
        url="https://example.com/rag",
        target_query="What is RAG?",
        page_title="RAG guide",
        content_preview="Retrieval...",
        similarity=SimilarityScore(score=0.5),
        analysis=sample_analysis,
        is_spa=False,
    )


class TestScoreHelpers:
    @pytest.mark.parametrize(
        "score,label,color",
        [
            (100, "Excellent", "green"),
            (80, "Excellent", "green"),
            (79, "Good", "yellow"),
            (60, "Good", "yellow"),
            (59, "Needs work", "dark_orange"),
            (40, "Needs work", "dark_orange"),
            (39, "Poor", "red"),
            (0, "Poor", "red"),
        ],
    )
    def test_label_and_color(self, score, label, color):
        assert score_label(score) == label
        assert score_color(score) == color


class TestDiagnoseCommand:
    """Tests for `llmo diagnose`."""

    def test_renders_report(self, report):
        service = MagicMock()
        service.diagnose.return_value = DiagnosisOutcome.ok(report)

        with patch(
            "llmo.composition.container.get_diagnosis_service", return_value=service
        ):
            result = runner.invoke(commands.app, ["diagnose", report.url, report.target_query])

        assert result.exit_code == 0, result.output
        assert "RAG guide" in result.output
        assert "Good" in result.output
        assert "75%" in result.output
        service.diagnose.assert_called_once_with(report.url, report.target_query)

    def test_json_output(self, report):
        service = MagicMock()
        service.diagnose.return_value = DiagnosisOutcome.ok(report)

        with patch(
            "llmo.composition.container.get_diagnosis_service", return_value=service
        ):
            result = runner.invoke(
                commands.app, ["diagnose", report.url, report.target_query, "--json"]
            )

        assert result.exit_code == 0, result.output
        assert '"overallScore": 72' in result.output
        assert '"similarityPercentage": 75' in result.output

    def test_failure_exits_nonzero(self):
        service = MagicMock()
        service.diagnose.return_value = DiagnosisOutcome.failed(
            FailureReason.FETCH_FAILED, "Could not access the URL."
        )

        with patch(
            "llmo.composition.container.get_diagnosis_service", return_value=service
        ):
            result = runner.invoke(commands.app, ["diagnose", "https://bad.example", "query"])

        assert result.exit_code == 1
        assert "fetch_failed" in result.output
        assert "Could not access the URL." in result.output

    def test_missing_key_exits_before_diagnosing(self, monkeypatch):
        monkeypatch.setattr(commands.settings, "google_api_key", "")

        with patch("llmo.composition.container.get_diagnosis_service") as get_service:
            result = runner.invoke(commands.app, ["diagnose", "https://example.com", "query"])

        assert result.exit_code == 1
        assert "LLMO_CFG_002" in result.output
        get_service.assert_not_called()


class TestHistoryCommand:
    @pytest.mark.parametrize(
        ("similarity", "shown"),
        [(0.6, "80%"), (-0.2, "40%")],
    )
    def test_lists_entries(self, similarity, shown):
        store = MagicMock()
        store.recent.return_value = [
            HistoryEntry(
                id=1,
                url="https://example.com/rag",
                target_query="What is RAG?",
                page_title="RAG guide",
                similarity_score=similarity,
                created_at="2026-01-01",
            )
        ]

        with patch("llmo.composition.container.get_store", return_value=store):
            result = runner.invoke(commands.app, ["history", "--limit", "5"])

        assert result.exit_code == 0, result.output
        assert shown in result.output
        assert "-20%" not in result.output
        store.recent.assert_called_once_with(5)

    def test_no_store(self):
        with patch("llmo.composition.container.get_store", return_value=None):
            result = runner.invoke(commands.app, ["history"])

        assert result.exit_code == 0
        assert "No diagnoses recorded yet." in result.output


class TestSetupDbCommand:
    def test_reset(self):
        store = MagicMock()

        with (
            patch("llmo.composition.container.get_store", return_value=store),
            patch.object(commands, "logger") as log,
        ):
            result = runner.invoke(commands.app, ["setup-db", "--reset"])

        assert result.exit_code == 0, result.output
        store.setup.assert_called_once_with(reset=True)
        log.info.assert_called_once()

    def test_logs_under_package_logger(self):
        assert commands.logger.name == "llmo.cli"

    def test_disabled_store(self):
        with patch("llmo.composition.container.get_store", return_value=None):
            result = runner.invoke(commands.app, ["setup-db"])

        assert result.exit_code == 0
        assert "Storage is disabled" in result.output
