"""Diagnosis records, reports and outcomes."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from .analysis import AnalysisResult, SimilarityScore


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


class FailureReason(Enum):
    """Why a diagnosis could not produce a report.

    Attributes:
        INSUFFICIENT_CONTENT: The page yielded too little text to analyse.
        FETCH_FAILED: The URL was unreachable or not an HTML page.
        EMBEDDING_FAILED: The embedding provider is misconfigured or failing.
        UNKNOWN: Anything else; details are logged, not displayed.
    """

    INSUFFICIENT_CONTENT = "insufficient_content"
    FETCH_FAILED = "fetch_failed"
    EMBEDDING_FAILED = "embedding_failed"
    UNKNOWN = "unknown"


@dataclass
class DiagnosisRecord:
    """What gets persisted for one diagnosis.

    Attributes:
        url: Diagnosed URL.
        target_query: Question the page was evaluated against.
        page_title: Extracted page title.
        content_preview: First characters of the content, "..." suffixed when cut.
        similarity_score: Raw cosine similarity.
        content_embedding: Embedding of the page content.
        query_embedding: Embedding of the target question.
        analysis: The analysis result.
        analysis_source: ``model:<name>`` or ``heuristic``.
        created_at: ISO-8601 UTC timestamp.
    """

    url: str
    target_query: str
    page_title: str
    content_preview: str
    similarity_score: float
    content_embedding: list[float]
    query_embedding: list[float]
    analysis: AnalysisResult
    analysis_source: str
    created_at: str = field(default_factory=_utc_now)


@dataclass
class DiagnosisReport:
    """Successful diagnosis, as shown to the user."""

    url: str
    target_query: str
    page_title: str
    content_preview: str
    similarity: SimilarityScore
    analysis: AnalysisResult
    is_spa: bool
    scraped_at: str = field(default_factory=_utc_now)

    def to_dict(self) -> dict:
        """Serialize for JSON responses."""
        return {
            "url": self.url,
            "targetQuery": self.target_query,
            "pageTitle": self.page_title,
            "contentPreview": self.content_preview,
            "similarityScore": self.similarity.score,
            "similarityPercentage": self.similarity.percentage,
            "analysis": self.analysis.to_json_dict(),
            "scrapedAt": self.scraped_at,
            "isSPA": self.is_spa,
        }


@dataclass
class DiagnosisOutcome:
    """Either a report or a classified, displayable failure."""

    success: bool
    report: DiagnosisReport | None = None
    reason: FailureReason | None = None
    message: str | None = None

    @classmethod
    def ok(cls, report: DiagnosisReport) -> "DiagnosisOutcome":
        return cls(success=True, report=report)

    @classmethod
    def failed(cls, reason: FailureReason, message: str) -> "DiagnosisOutcome":
        return cls(success=False, reason=reason, message=message)


@dataclass
class HistoryEntry:
    """Summary row of a past diagnosis."""

    id: int | str
    url: str
    target_query: str
    page_title: str
    similarity_score: float
    created_at: str
