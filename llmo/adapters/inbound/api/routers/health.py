"""Health check endpoints."""

from fastapi import APIRouter, Depends

from ..... import __version__
from .....core.ports import DiagnosisStorePort
from ..deps import get_diagnosis_store
from ..models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="healthy", version=__version__, store="not_checked")


@router.get("/ready", response_model=HealthResponse)
def readiness_check(
    store: DiagnosisStorePort | None = Depends(get_diagnosis_store),
) -> HealthResponse:
    """Readiness probe.

    Checks that the diagnosis store is reachable.
    """
    if store is None:
        return HealthResponse(status="ready", version=__version__, store="disabled")

    if store.ping():
        return HealthResponse(status="ready", version=__version__, store="connected")
    return HealthResponse(status="degraded", version=__version__, store="unreachable")
