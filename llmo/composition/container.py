"""Composition root wiring adapters to the diagnosis service."""

import logging
from functools import lru_cache

from ..adapters.outbound.embedding import GeminiEmbedding, OpenAIEmbedding
from ..adapters.outbound.fetch import RequestsFetcher
from ..adapters.outbound.llm import GeminiBackend, OpenAIBackend
from ..adapters.outbound.store import QdrantDiagnosisStore, SQLiteDiagnosisStore
from ..config.settings import Settings, settings
from ..core.ports import DiagnosisStorePort, EmbeddingPort, ModelBackend
from ..core.services import (
    AnalysisEngine,
    ContentAssembler,
    DiagnosisService,
    EmbeddingService,
    PageParser,
    SPADetector,
)

logger = logging.getLogger(__name__)


def build_model_backends(config: Settings) -> list[ModelBackend]:
    """Build analysis candidates in the configured preference order.

    Entries whose provider has no API key are left out.
    """
    backends: list[ModelBackend] = []
    for entry in config.analysis_models:
        provider, model = config.resolve_model(entry)
        api_key = config.openai_api_key if provider == "openai" else config.google_api_key
        if not api_key:
            logger.warning("Skipping model %s: no %s API key configured", entry, provider)
            continue
        if provider == "openai":
            backends.append(
                OpenAIBackend(config.openai_api_key, model, config.analysis_temperature)
            )
        else:
            backends.append(
                GeminiBackend(config.google_api_key, model, config.analysis_temperature)
            )
    return backends


def build_embedding_backend(config: Settings) -> EmbeddingPort:
    if config.embedding_provider == "openai":
        return OpenAIEmbedding(config.openai_api_key, config.openai_embedding_model)
    return GeminiEmbedding(config.google_api_key, config.embedding_model)


def build_store(config: Settings) -> DiagnosisStorePort | None:
    if config.store_backend == "qdrant":
        return QdrantDiagnosisStore(
            url=config.qdrant_url,
            api_key=config.qdrant_api_key,
            collection_name=config.qdrant_collection,
        )
    if config.store_backend == "sqlite":
        return SQLiteDiagnosisStore(config.database_path)
    return None


@lru_cache
def get_store() -> DiagnosisStorePort | None:
    logger.info("Initializing diagnosis store (%s)...", settings.store_backend)
    return build_store(settings)


@lru_cache
def get_engine() -> AnalysisEngine:
    logger.info("Initializing AnalysisEngine with %d models...", len(settings.analysis_models))
    return AnalysisEngine(
        build_model_backends(settings),
        language=settings.analysis_language,
        skip_on_any_error=settings.analysis_skip_on_any_error,
    )


@lru_cache
def get_diagnosis_service() -> DiagnosisService:
    logger.info("Initializing DiagnosisService...")
    parser = PageParser(
        spa_detector=SPADetector(min_content_length=settings.min_content_length),
        assembler=ContentAssembler(min_content_length=settings.min_content_length),
    )
    return DiagnosisService(
        fetcher=RequestsFetcher(settings.fetch_timeout, settings.fetch_user_agent),
        embeddings=EmbeddingService(
            build_embedding_backend(settings), max_chars=settings.embedding_max_chars
        ),
        engine=get_engine(),
        store=get_store(),
        parser=parser,
        min_content_length=settings.min_content_length,
        min_spa_content_length=settings.min_spa_content_length,
        preview_length=settings.content_preview_length,
    )
