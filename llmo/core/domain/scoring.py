"""Score presentation helpers."""


def score_label(score: int) -> str:
    """Human label for a 0-100 score."""
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Needs work"
    return "Poor"


def score_color(score: int) -> str:
    """Rich color name matching ``score_label``."""
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    if score >= 40:
        return "dark_orange"
    return "red"
