"""Language-model analysis with ordered fallback across backends.

The engine walks a static preference list of backends:

    PENDING -> TRYING(0) -> TRYING(1) -> ... -> SUCCEEDED | ALL_FAILED

Each failed attempt is classified by ``classify_failure``. Quota,
model-not-found and missing-credential failures skip to the next backend;
anything else is fatal and ends the walk immediately (unless the engine
is told to skip on every error). The first response that parses as an
``AnalysisResult`` wins and no later backend is called.
"""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError

from ..domain import AnalysisResult, ExtractedDocument, SimilarityScore
from ..domain.exceptions import AllBackendsFailedError, AnalysisParseError, ConfigurationError
from ..ports.llm_port import ModelBackend
from .prompts import ANALYSIS_PROMPT, MAX_PROMPT_CONTENT_CHARS, MAX_PROMPT_HEADINGS

logger = logging.getLogger(__name__)

QUOTA_MARKERS = (
    "quota",
    "rate limit",
    "rate_limit",
    "ratelimit",
    "resource_exhausted",
    "resource exhausted",
    "too many requests",
    "429",
)

NOT_FOUND_MARKERS = (
    "not found",
    "not_found",
    "404",
    "does not exist",
)

_DECODER = json.JSONDecoder()


class EngineState(Enum):
    """Where the engine is in its walk over the backend list."""

    PENDING = "pending"
    TRYING = "trying"
    SUCCEEDED = "succeeded"
    ALL_FAILED = "all_failed"


class FailureAction(Enum):
    """What to do after a backend attempt fails."""

    SKIP = "skip"
    FATAL = "fatal"


def is_quota_error(error: BaseException) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in QUOTA_MARKERS)


def is_not_found_error(error: BaseException) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in NOT_FOUND_MARKERS)


def classify_failure(error: BaseException, *, skip_on_any_error: bool = False) -> FailureAction:
    """Decide whether a failed attempt moves on to the next backend.

    Args:
        error: The exception raised by the attempt.
        skip_on_any_error: Treat every failure as skippable.

    Returns:
        FailureAction.SKIP for quota / rate-limit / model-not-found errors,
        and for backends missing their credentials; FailureAction.FATAL
        otherwise.
    """
    if skip_on_any_error or isinstance(error, ConfigurationError):
        return FailureAction.SKIP
    if is_quota_error(error) or is_not_found_error(error):
        return FailureAction.SKIP
    return FailureAction.FATAL


def build_prompt(
    document: ExtractedDocument,
    query: str,
    similarity: SimilarityScore,
    language: str = "English",
) -> str:
    """Fill the analysis template for one page."""
    return ANALYSIS_PROMPT.format(
        query=query,
        title=document.title,
        description=document.description,
        headings="\n".join(document.headings[:MAX_PROMPT_HEADINGS]),
        content=document.main_content[:MAX_PROMPT_CONTENT_CHARS],
        structured_data="Present" if document.has_structured_data else "None",
        similarity_percentage=similarity.percentage,
        language=language,
    )


def first_json_object(text: str) -> dict | None:
    """Return the first well-formed JSON object embedded in ``text``.

    Each ``{`` is tried as a starting point; prose before or after the
    object, braces included, is ignored.
    """
    index = text.find("{")
    while index != -1:
        try:
            value, _ = _DECODER.raw_decode(text, index)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            return value
        index = text.find("{", index + 1)
    return None


def parse_analysis(text: str) -> AnalysisResult:
    """Extract and validate the JSON object in a model response.

    Raises:
        AnalysisParseError: No JSON object, or the object has the wrong shape.
    """
    data = first_json_object(text or "")
    if data is None:
        raise AnalysisParseError(
            "Failed to parse model response as JSON",
            context={"response_preview": (text or "")[:200]},
        )
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        raise AnalysisParseError(
            "Model response JSON does not match the analysis shape",
            cause=e,
            context={"response_preview": json.dumps(data)[:200]},
        ) from e


@dataclass
class BackendAttempt:
    """Outcome of one backend call."""

    backend: str
    succeeded: bool
    action: FailureAction | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "backend": self.backend,
            "succeeded": self.succeeded,
            "action": self.action.value if self.action else None,
            "error": self.error,
        }


@dataclass
class EngineResult:
    """Successful analysis and the backend that produced it."""

    analysis: AnalysisResult
    backend: str
    state: EngineState = EngineState.SUCCEEDED
    attempts: list[BackendAttempt] = field(default_factory=list)


class AnalysisEngine:
    """Ask a ranked list of model backends to analyse a page."""

    def __init__(
        self,
        backends: Sequence[ModelBackend],
        *,
        language: str = "English",
        skip_on_any_error: bool = False,
    ) -> None:
        """Initialize the engine.

        Args:
            backends: Candidates in preference order, tried top to bottom.
            language: Language the model should write feedback in.
            skip_on_any_error: Move on after any failure instead of only
                quota and not-found failures.
        """
        self.backends = list(backends)
        self.language = language
        self.skip_on_any_error = skip_on_any_error

    def analyze(
        self,
        document: ExtractedDocument,
        query: str,
        similarity: SimilarityScore,
    ) -> EngineResult:
        """Run the fallback walk.

        Args:
            document: Extracted page.
            query: Target question.
            similarity: Content/query similarity.

        Returns:
            EngineResult from the first backend that produced a valid analysis.

        Raises:
            AllBackendsFailedError: Every backend was skipped, a fatal error
                stopped the walk, or there were no backends. The last error
                is attached as the cause.
        """
        prompt = build_prompt(document, query, similarity, self.language)
        attempts: list[BackendAttempt] = []
        last_error: Exception | None = None
        state = EngineState.PENDING
        total = len(self.backends)

        for index, backend in enumerate(self.backends):
            state = EngineState.TRYING
            logger.info("Trying model backend %d/%d: %s", index + 1, total, backend.name)

            try:
                analysis = parse_analysis(backend.invoke(prompt))
            except Exception as e:
                last_error = e
                action = classify_failure(e, skip_on_any_error=self.skip_on_any_error)
                attempts.append(
                    BackendAttempt(backend.name, False, action=action, error=str(e)[:200])
                )
                logger.warning(
                    "Model backend %s failed (%s): %s", backend.name, action.value, str(e)[:100]
                )
                if action is FailureAction.FATAL:
                    break
                continue

            attempts.append(BackendAttempt(backend.name, True))
            state = EngineState.SUCCEEDED
            logger.info("Analysis produced by model backend %s", backend.name)
            return EngineResult(
                analysis=analysis, backend=backend.name, state=state, attempts=attempts
            )

        state = EngineState.ALL_FAILED
        raise AllBackendsFailedError(
            "All model backends failed" if self.backends else "No model backends configured",
            cause=last_error,
            context={
                "state": state.value,
                "attempts": [attempt.to_dict() for attempt in attempts],
            },
        )
