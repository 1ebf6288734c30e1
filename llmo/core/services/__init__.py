"""Core services: page extraction, similarity, analysis and orchestration."""

from .analysis_engine import AnalysisEngine, EngineResult, EngineState, FailureAction
from .content_assembler import ContentAssembler
from .content_extractor import ContentExtractor
from .diagnosis_service import DiagnosisService
from .embedding_service import EmbeddingService
from .heuristic_scorer import HeuristicScorer, heuristic_score
from .page_parser import PageParser
from .similarity import SimilarityScorer, cosine_similarity
from .spa_detector import SPADetector
from .structured_data import StructuredDataExtractor

__all__ = [
    "AnalysisEngine",
    "EngineResult",
    "EngineState",
    "FailureAction",
    "ContentAssembler",
    "ContentExtractor",
    "DiagnosisService",
    "EmbeddingService",
    "HeuristicScorer",
    "heuristic_score",
    "PageParser",
    "SimilarityScorer",
    "cosine_similarity",
    "SPADetector",
    "StructuredDataExtractor",
]
