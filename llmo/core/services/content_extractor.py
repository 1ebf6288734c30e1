"""Heuristic main-content extraction from page markup."""

import copy
import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from ..domain.utils import clean_text, normalize_whitespace

logger = logging.getLogger(__name__)

# Elements that never carry primary content
NOISE_SELECTOR = ", ".join(
    [
        "script",
        "style",
        "nav",
        "header",
        "footer",
        "aside",
        "iframe",
        "noscript",
        "svg",
        "form",
        "button",
        "input",
        "[role='navigation']",
        "[role='banner']",
        "[role='contentinfo']",
        ".sidebar",
        ".navigation",
        ".menu",
        ".ad",
        ".advertisement",
        ".social-share",
        ".comments",
    ]
)

# Content regions, most specific first
CONTENT_SELECTORS = (
    "main",
    "article",
    "[role='main']",
    ".main-content",
    ".post-content",
    ".entry-content",
    ".content",
    "#content",
    "#main",
)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

MIN_REGION_LENGTH = 50


@dataclass(frozen=True)
class ContentExtraction:
    """Text and outline taken from the cleaned page."""

    main_content: str
    headings: tuple[str, ...]


def _outermost(elements: list[Tag]) -> list[Tag]:
    """Drop matches nested inside another match so text is not counted twice."""
    matched = {id(el) for el in elements}
    return [el for el in elements if not any(id(parent) in matched for parent in el.parents)]


def _text_of(elements: list[Tag]) -> str:
    return normalize_whitespace(" ".join(clean_text(el.get_text(" ")) for el in elements))


class ContentExtractor:
    """Isolate a page's primary text.

    Noise elements are removed from a private copy of the tree before any
    text is read, so the caller's parsed document stays untouched for other
    extractors.
    """

    def __init__(
        self,
        content_selectors: tuple[str, ...] = CONTENT_SELECTORS,
        min_region_length: int = MIN_REGION_LENGTH,
    ) -> None:
        self.content_selectors = content_selectors
        self.min_region_length = min_region_length

    def extract(self, soup: BeautifulSoup) -> ContentExtraction:
        """Extract normalized main content and headings.

        Args:
            soup: Parsed page. Not modified.

        Returns:
            ContentExtraction with whitespace-normalized text.
        """
        cleaned = copy.copy(soup)
        self.remove_noise(cleaned)

        return ContentExtraction(
            main_content=self.extract_main_content(cleaned),
            headings=self.extract_headings(cleaned),
        )

    @staticmethod
    def remove_noise(soup: BeautifulSoup) -> int:
        """Remove non-content elements in place. Returns how many were removed."""
        removed = 0
        for element in soup.select(NOISE_SELECTOR):
            # A parent removed earlier in the loop takes its children with it
            if element.decomposed:
                continue
            element.decompose()
            removed += 1
        return removed

    def extract_main_content(self, soup: BeautifulSoup) -> str:
        """Return the first content region long enough, else the body text."""
        for selector in self.content_selectors:
            elements = soup.select(selector)
            if not elements:
                continue
            text = _text_of(_outermost(elements))
            if len(text) > self.min_region_length:
                logger.debug("Main content matched selector %r (%d chars)", selector, len(text))
                return text

        body = soup.body or soup
        logger.debug("No content region matched; falling back to body text")
        return _text_of([body])

    @staticmethod
    def extract_headings(soup: BeautifulSoup) -> tuple[str, ...]:
        """Return non-empty h1-h6 texts in document order."""
        headings = []
        for tag in soup.find_all(list(HEADING_TAGS)):
            text = normalize_whitespace(clean_text(tag.get_text(" ")))
            if text:
                headings.append(text)
        return tuple(headings)
