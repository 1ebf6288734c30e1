"""Diagnosis endpoint."""

import logging

from fastapi import APIRouter, Depends

from .....core.domain.utils import clean_text
from .....core.services import DiagnosisService
from ..deps import get_service
from ..models import DiagnoseRequest, DiagnoseResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["diagnose"])


@router.post(
    "/diagnose",
    response_model=DiagnoseResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
)
def diagnose(
    request: DiagnoseRequest,
    service: DiagnosisService = Depends(get_service),
) -> DiagnoseResponse:
    """Diagnose how findable a page is for a target question.

    Classified failures (unreachable URL, too little content, embedding
    problems) come back with ``success=false`` and a displayable message.
    """
    outcome = service.diagnose(str(request.url), clean_text(request.target_query).strip())

    if outcome.success and outcome.report is not None:
        return DiagnoseResponse(success=True, data=outcome.report.to_dict())

    return DiagnoseResponse(
        success=False,
        reason=outcome.reason.value if outcome.reason else None,
        error=outcome.message,
    )
