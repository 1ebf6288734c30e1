"""Similarity and analysis result models.

``AnalysisResult`` is the output contract for both the language-model
backends and the heuristic fallback. It is a pydantic model so the JSON a
model returns can be validated in one step; field aliases keep the camelCase
keys the prompt asks for.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_percentage(score: float) -> int:
    """Map a cosine similarity in [-1, 1] onto [0, 100]."""
    return round(((score + 1) / 2) * 100)


def _clamp_score(value: object) -> object:
    # Models occasionally answer 105 or 87.5; non-numbers are left to validation
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return max(0, min(100, round(value)))
    return value


@dataclass(frozen=True)
class SimilarityScore:
    """Cosine similarity between page content and target question."""

    score: float
    percentage: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "percentage", to_percentage(self.score))


class CategoryScore(BaseModel):
    """Score and feedback for one evaluation axis."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    feedback: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def clamp_score(cls, value: object) -> object:
        return _clamp_score(value)


class AnalysisResult(BaseModel):
    """Findability verdict for one page and question."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    overall_score: int = Field(alias="overallScore", ge=0, le=100)
    comprehensiveness: CategoryScore
    structured_data: CategoryScore = Field(alias="structuredData")
    primary_source: CategoryScore = Field(alias="primarySource")
    improvements: list[str] = Field(default_factory=list)
    summary: str

    @field_validator("overall_score", mode="before")
    @classmethod
    def clamp_overall(cls, value: object) -> object:
        return _clamp_score(value)

    def to_json_dict(self) -> dict:
        """Serialize with the camelCase keys used on the wire and in storage."""
        return self.model_dump(by_alias=True)
