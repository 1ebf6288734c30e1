"""Analysis exceptions for LLMO Checker."""

from .base import LLMOError


class AnalysisError(LLMOError):
    """Base error for language-model analysis."""

    error_code = "LLMO_ANA_001"


class BackendInvocationError(AnalysisError):
    """A model backend call raised.

    The message keeps the provider's wording so quota and not-found
    conditions can still be recognised when classifying the failure.
    """

    error_code = "LLMO_ANA_002"


class AnalysisParseError(AnalysisError):
    """The model response did not contain a valid analysis JSON object."""

    error_code = "LLMO_ANA_003"


class AllBackendsFailedError(AnalysisError):
    """No backend produced an analysis.

    Raised both when every candidate was skipped and when a fatal error
    stopped the attempt loop early. Callers fall back to heuristic scoring.
    """

    error_code = "LLMO_ANA_004"
