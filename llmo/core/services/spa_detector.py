"""Detection of script-rendered (single-page application) pages."""

import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Root containers and attributes left behind by client-side frameworks
SPA_MARKERS = (
    "#app",
    "#root",
    "#__next",
    "#__nuxt",
    ".StudioCanvas",
    "[data-reactroot]",
    "[ng-app]",
    "[data-v-app]",
)

# Vue scoped styles add attributes like data-v-7ba5bd90
VUE_SCOPED_ATTR_PREFIX = "data-v-"

MIN_CONTENT_LENGTH = 100


class SPADetector:
    """Classify a page as script-rendered.

    A page counts as an SPA when the measured text is shorter than
    ``min_content_length`` and at least one framework marker is present.
    The caller decides what text to measure; the pipeline passes the
    extracted main content, before any metadata is assembled into it.
    """

    def __init__(
        self,
        markers: tuple[str, ...] = SPA_MARKERS,
        min_content_length: int = MIN_CONTENT_LENGTH,
    ) -> None:
        self.markers = markers
        self.min_content_length = min_content_length

    def find_marker(self, soup: BeautifulSoup) -> str | None:
        """Return the first framework marker present in the page, if any."""
        for marker in self.markers:
            if soup.select_one(marker) is not None:
                return marker

        for tag in soup.find_all(True):
            for attr in tag.attrs:
                if attr.startswith(VUE_SCOPED_ATTR_PREFIX):
                    return f"[{attr}]"
        return None

    def is_spa(self, soup: BeautifulSoup, measured_text: str) -> bool:
        """Classify the page.

        Args:
            soup: Unmodified parsed page (markers may sit in removed regions).
            measured_text: Extracted main content.

        Returns:
            True when content is minimal and a framework marker is present.
        """
        if len(measured_text) >= self.min_content_length:
            return False

        marker = self.find_marker(soup)
        if marker:
            logger.info(
                "Page looks script-rendered (marker %s, %d chars of content)",
                marker,
                len(measured_text),
            )
            return True
        return False
