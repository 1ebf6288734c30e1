"""Diagnosis history endpoint."""

from fastapi import APIRouter, Depends, Query

from .....core.services import DiagnosisService
from ..deps import get_service
from ..models import ErrorResponse, HistoryItem, HistoryResponse

router = APIRouter(prefix="/api/v1", tags=["history"])


@router.get(
    "/history",
    response_model=HistoryResponse,
    responses={503: {"model": ErrorResponse, "description": "Store unavailable"}},
)
def history(
    limit: int = Query(10, ge=1, le=100, description="Number of diagnoses to return"),
    service: DiagnosisService = Depends(get_service),
) -> HistoryResponse:
    """List the newest diagnoses."""
    items = [
        HistoryItem(
            id=entry.id,
            url=entry.url,
            target_query=entry.target_query,
            page_title=entry.page_title,
            similarity_score=entry.similarity_score,
            created_at=entry.created_at,
        )
        for entry in service.history(limit)
    ]
    return HistoryResponse(items=items, count=len(items))
