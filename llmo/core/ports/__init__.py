"""Ports: the interfaces the diagnosis core depends on."""

from .embedding_port import EmbeddingPort
from .fetcher_port import FetcherPort
from .llm_port import ModelBackend
from .store_port import DiagnosisStorePort

__all__ = ["EmbeddingPort", "FetcherPort", "ModelBackend", "DiagnosisStorePort"]
