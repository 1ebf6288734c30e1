"""Domain models for LLMO Checker.

- document: PageMetadata and ExtractedDocument built from raw markup
- analysis: SimilarityScore, CategoryScore and AnalysisResult
- diagnosis: records, reports, outcomes and history entries

All models are re-exported here:

    from llmo.core.domain import ExtractedDocument, AnalysisResult
"""

from .analysis import AnalysisResult, CategoryScore, SimilarityScore, to_percentage
from .diagnosis import (
    DiagnosisOutcome,
    DiagnosisRecord,
    DiagnosisReport,
    FailureReason,
    HistoryEntry,
)
from .document import ExtractedDocument, PageMetadata

__all__ = [
    # Document models
    "PageMetadata",
    "ExtractedDocument",
    # Analysis models
    "SimilarityScore",
    "CategoryScore",
    "AnalysisResult",
    "to_percentage",
    # Diagnosis models
    "FailureReason",
    "DiagnosisRecord",
    "DiagnosisReport",
    "DiagnosisOutcome",
    "HistoryEntry",
]
