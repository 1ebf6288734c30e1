"""Diagnosis pipeline: fetch, extract, embed, score, analyse, persist."""

import logging
from concurrent.futures import ThreadPoolExecutor

from ...common.exception_handler import log_exception
from ..domain import (
    AnalysisResult,
    DiagnosisOutcome,
    DiagnosisRecord,
    DiagnosisReport,
    ExtractedDocument,
    FailureReason,
    HistoryEntry,
    SimilarityScore,
)
from ..domain.exceptions import (
    AllBackendsFailedError,
    EmbeddingError,
    FetchError,
    InsufficientContentError,
    LLMOError,
)
from ..domain.utils import truncate_content
from ..ports.fetcher_port import FetcherPort
from ..ports.store_port import DiagnosisStorePort
from .analysis_engine import AnalysisEngine
from .embedding_service import EmbeddingService
from .heuristic_scorer import HeuristicScorer
from .page_parser import PageParser
from .similarity import SimilarityScorer

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "An error occurred during diagnosis. Please try again later."


class DiagnosisService:
    """Run one diagnosis per call; holds no per-request state."""

    def __init__(
        self,
        fetcher: FetcherPort,
        embeddings: EmbeddingService,
        engine: AnalysisEngine,
        store: DiagnosisStorePort | None = None,
        *,
        parser: PageParser | None = None,
        scorer: SimilarityScorer | None = None,
        heuristic: HeuristicScorer | None = None,
        min_content_length: int = 100,
        min_spa_content_length: int = 50,
        preview_length: int = 500,
    ) -> None:
        """Initialize the service.

        Args:
            fetcher: Retrieves raw page HTML.
            embeddings: Embeds page content and target question.
            engine: Model-backed analysis with ordered fallback.
            store: Where finished diagnoses are persisted; None disables storage.
            parser: Markup to ExtractedDocument.
            scorer: Similarity scorer.
            heuristic: Fallback scorer when every model backend fails.
            min_content_length: Minimum content length for regular pages.
            min_spa_content_length: Minimum content length for script-rendered pages.
            preview_length: Stored/displayed content preview length.
        """
        self.fetcher = fetcher
        self.embeddings = embeddings
        self.engine = engine
        self.store = store
        self.parser = parser or PageParser()
        self.scorer = scorer or SimilarityScorer()
        self.heuristic = heuristic or HeuristicScorer()
        self.min_content_length = min_content_length
        self.min_spa_content_length = min_spa_content_length
        self.preview_length = preview_length

    def extract(self, url: str) -> ExtractedDocument:
        """Fetch and extract a page, rejecting pages with too little content.

        Raises:
            FetchError: The page could not be fetched.
            InsufficientContentError: Content is below the SPA-aware minimum.
        """
        logger.info("Fetching URL: %s", url)
        document = self.parser.parse(self.fetcher.fetch(url))
        logger.info(
            "Content length: %d, SPA: %s", len(document.main_content), document.is_spa
        )

        min_length = self.min_spa_content_length if document.is_spa else self.min_content_length
        if len(document.main_content) < min_length:
            raise InsufficientContentError(
                f"Extracted {len(document.main_content)} chars, need {min_length}",
                is_spa=document.is_spa,
                content_length=len(document.main_content),
                min_length=min_length,
            )
        return document

    def embed_pair(self, content: str, query: str) -> tuple[list[float], list[float]]:
        """Embed content and query concurrently."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="llmo-embed") as pool:
            content_future = pool.submit(self.embeddings.embed, content)
            query_future = pool.submit(self.embeddings.embed, query)
            return content_future.result(), query_future.result()

    def analyze(
        self, document: ExtractedDocument, query: str, similarity: SimilarityScore
    ) -> tuple[AnalysisResult, str]:
        """Run the model engine, falling back to heuristic scoring.

        Returns:
            The analysis and its source (``model:<backend>`` or ``heuristic``).
        """
        try:
            result = self.engine.analyze(document, query, similarity)
        except AllBackendsFailedError as e:
            logger.warning("All model backends failed, using heuristic analysis: %s", e.cause or e)
            return self.heuristic.score(document, similarity.score), "heuristic"
        return result.analysis, f"model:{result.backend}"

    def run(self, url: str, target_query: str) -> DiagnosisReport:
        """Diagnose a page, raising classified errors.

        Args:
            url: Page to diagnose.
            target_query: Question the page should answer.

        Returns:
            DiagnosisReport.

        Raises:
            FetchError, InsufficientContentError, EmbeddingError: Classified failures.
            LLMOError: Other pipeline failures (storage, invariant violations).
        """
        document = self.extract(url)

        logger.info("Generating embeddings...")
        content_vector, query_vector = self.embed_pair(document.main_content, target_query)

        similarity = self.scorer.score(content_vector, query_vector)
        logger.info("Similarity score: %.4f (%d%%)", similarity.score, similarity.percentage)

        analysis, source = self.analyze(document, target_query, similarity)
        preview = truncate_content(document.main_content, self.preview_length)

        if self.store is not None:
            record_id = self.store.persist(
                DiagnosisRecord(
                    url=url,
                    target_query=target_query,
                    page_title=document.title,
                    content_preview=preview,
                    similarity_score=similarity.score,
                    content_embedding=content_vector,
                    query_embedding=query_vector,
                    analysis=analysis,
                    analysis_source=source,
                )
            )
            logger.info("Saved diagnosis %s", record_id)

        return DiagnosisReport(
            url=url,
            target_query=target_query,
            page_title=document.title,
            content_preview=preview,
            similarity=similarity,
            analysis=analysis,
            is_spa=document.is_spa,
        )

    def diagnose(self, url: str, target_query: str) -> DiagnosisOutcome:
        """Diagnose a page; never raises.

        Returns:
            DiagnosisOutcome holding the report, or a failure reason and a
            message safe to show the user.
        """
        context = {"url": url, "target_query": target_query}
        try:
            return DiagnosisOutcome.ok(self.run(url, target_query))
        except InsufficientContentError as e:
            logger.warning("Insufficient content for %s: %s", url, e.message)
            return DiagnosisOutcome.failed(FailureReason.INSUFFICIENT_CONTENT, e.user_message)
        except FetchError as e:
            log_exception(e, log=logger, level=logging.WARNING, extra_context=context)
            return DiagnosisOutcome.failed(FailureReason.FETCH_FAILED, e.user_message)
        except EmbeddingError as e:
            log_exception(e, log=logger, extra_context=context)
            return DiagnosisOutcome.failed(FailureReason.EMBEDDING_FAILED, e.user_message)
        except LLMOError as e:
            log_exception(e, log=logger, extra_context=context)
            return DiagnosisOutcome.failed(FailureReason.UNKNOWN, GENERIC_FAILURE_MESSAGE)
        except Exception as e:
            log_exception(e, log=logger, extra_context=context)
            return DiagnosisOutcome.failed(FailureReason.UNKNOWN, GENERIC_FAILURE_MESSAGE)

    def history(self, limit: int = 10) -> list[HistoryEntry]:
        """Newest diagnoses first; empty when storage is disabled."""
        if self.store is None:
            return []
        return self.store.recent(limit)
