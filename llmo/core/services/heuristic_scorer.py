"""Deterministic scoring used when no model backend is available."""

from ..domain import AnalysisResult, CategoryScore, ExtractedDocument, to_percentage


def _structure_score(heading_count: int, has_structured_data: bool) -> int:
    score = 40
    if heading_count >= 5:
        score = 70
    elif heading_count >= 3:
        score = 55
    if has_structured_data:
        score += 20
    return score


def _comprehensiveness_score(length: int) -> int:
    if length >= 2000:
        return 70
    if length >= 1000:
        return 55
    if length >= 500:
        return 45
    return 40


def _primary_source_score(description: str) -> int:
    return 60 if description and len(description) > 50 else 50


def _relevance_band(similarity: float) -> str:
    if similarity > 0.7:
        return "high"
    if similarity > 0.5:
        return "moderate"
    return "low, with room for improvement"


def heuristic_score(document: ExtractedDocument, similarity: float) -> AnalysisResult:
    """Score a page without calling any model.

    Pure function: the same document and similarity always give the same
    result, feedback text included.

    Args:
        document: Extracted page.
        similarity: Cosine similarity between content and target question.

    Returns:
        AnalysisResult built from length, heading and metadata thresholds.
    """
    heading_count = len(document.headings)
    length = document.word_count

    base = round(similarity * 50) + 25
    structure = _structure_score(heading_count, document.has_structured_data)
    comprehensiveness = _comprehensiveness_score(length)
    primary = _primary_source_score(document.description)
    overall = max(0, min(100, round((base + structure + comprehensiveness + primary) / 4)))

    if length >= 1000:
        length_note = "There is a solid amount of information."
    else:
        length_note = "Adding more detailed information is recommended."

    if document.has_structured_data:
        structured_note = "Structured data (JSON-LD) is present."
        structured_tip = "Enrich the existing structured data with more properties"
    else:
        structured_note = "Adding structured data (JSON-LD) is recommended."
        structured_tip = "Add JSON-LD structured data describing the page"

    if heading_count < 5:
        heading_tip = "Add headings (h2, h3) to organize the content"
    else:
        heading_tip = "The heading structure is good"

    if document.description:
        description_note = "A meta description is set."
    else:
        description_note = "Setting a meta description is recommended."

    return AnalysisResult(
        overall_score=overall,
        comprehensiveness=CategoryScore(
            score=comprehensiveness,
            feedback=f"The content is {length} characters long. {length_note}",
        ),
        structured_data=CategoryScore(
            score=structure,
            feedback=f"{heading_count} headings were detected. {structured_note}",
        ),
        primary_source=CategoryScore(score=primary, feedback=description_note),
        improvements=[
            structured_tip,
            heading_tip,
            "Include a direct answer to the target question",
        ],
        summary=(
            f"With a vector similarity of {to_percentage(similarity)}%, relevance to the "
            f"target question is {_relevance_band(similarity)}. (Simplified analysis)"
        ),
    )


class HeuristicScorer:
    """Callable wrapper so the fallback can be injected like other services."""

    def score(self, document: ExtractedDocument, similarity: float) -> AnalysisResult:
        return heuristic_score(document, similarity)
