"""Diagnosis stores."""

from .qdrant_store import QdrantDiagnosisStore
from .sqlite_store import SQLiteDiagnosisStore

__all__ = ["QdrantDiagnosisStore", "SQLiteDiagnosisStore"]
