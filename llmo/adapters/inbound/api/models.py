"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class DiagnoseRequest(BaseModel):
    """Request model for diagnosing one page."""

    url: HttpUrl = Field(
        ...,
        description="Page to diagnose",
        json_schema_extra={"example": "https://example.com/guide/rag"},
    )
    target_query: str = Field(
        ...,
        min_length=5,
        max_length=500,
        description="Question the page should be retrieved for",
        json_schema_extra={"example": "How does retrieval-augmented generation work?"},
    )


class DiagnoseResponse(BaseModel):
    """Outcome of a diagnosis.

    ``data`` holds the report on success; ``reason`` and ``error`` describe a
    classified failure otherwise.
    """

    success: bool = Field(..., description="Whether a report was produced")
    data: dict | None = Field(None, description="Diagnosis report (camelCase keys)")
    reason: str | None = Field(None, description="Failure category")
    error: str | None = Field(None, description="Message safe to show to users")


class HistoryItem(BaseModel):
    """One past diagnosis."""

    id: int | str
    url: str
    target_query: str
    page_title: str
    similarity_score: float
    created_at: str


class HistoryResponse(BaseModel):
    """Newest diagnoses first."""

    items: list[HistoryItem] = Field(default_factory=list)
    count: int = Field(0, description="Number of items returned")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    store: str = Field(..., description="Diagnosis store status")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., LLMO_FET_002)")
    message: str = Field(..., description="Developer-facing error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "StorageError", "code": "LLMO_STO_001", "message": "..."},
            "location": {"class": "SQLiteDiagnosisStore", "method": "recent", ...},
            "context": {"db_path": "data/llmo.db"},
            "stack_trace": ["Traceback...", ...]  # Only in debug mode
        }
    """

    error: ErrorDetail
    location: ErrorLocation | None = None
    context: dict | None = None
    cause: dict | None = None
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
