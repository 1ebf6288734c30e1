"""FastAPI dependency injection for LLMO Checker."""

from ....composition.container import get_diagnosis_service, get_store
from ....core.ports import DiagnosisStorePort
from ....core.services import DiagnosisService


def get_service() -> DiagnosisService:
    """Get the DiagnosisService singleton."""
    return get_diagnosis_service()


def get_diagnosis_store() -> DiagnosisStorePort | None:
    """Get the configured store, or None when storage is disabled."""
    return get_store()
