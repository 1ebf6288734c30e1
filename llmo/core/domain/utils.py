"""Text helpers shared across the pipeline."""

import re
import unicodedata

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINES = re.compile(r"\n\s*\n")


def clean_text(text: str) -> str:
    """Remove BOM / replacement characters and apply NFKC normalization.

    Args:
        text: Input text that may contain BOM or compatibility characters.

    Returns:
        Cleaned text, or an empty string for falsy input.
    """
    if not text:
        return ""
    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    return unicodedata.normalize("NFKC", cleaned)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs and blank-line runs, then strip."""
    if not text:
        return ""
    collapsed = _WHITESPACE_RUN.sub(" ", text)
    collapsed = _BLANK_LINES.sub("\n", collapsed)
    return collapsed.strip()


def truncate_content(content: str, max_length: int = 500) -> str:
    """Cut content for previews, appending "..." when anything was dropped."""
    if len(content) <= max_length:
        return content
    return content[:max_length] + "..."
