"""JSON-LD and page metadata extraction."""

import json
import logging
from typing import Any

from bs4 import BeautifulSoup

from ..domain import PageMetadata
from ..domain.utils import clean_text

logger = logging.getLogger(__name__)

# Keys whose string values carry meaning worth embedding
TEXT_KEYS = (
    "name",
    "description",
    "headline",
    "articleBody",
    "text",
    "about",
    "slogan",
    "knowsAbout",
    "areaServed",
    "address",
    "telephone",
    "email",
)

MAX_WALK_DEPTH = 32


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    content = tag.get("content") or ""
    return clean_text(str(content)).strip()


class StructuredDataExtractor:
    """Read JSON-LD blocks and site metadata from parsed markup.

    Only reads the document, so it can share a parsed tree with any other
    read-only extractor.
    """

    def __init__(self, max_depth: int = MAX_WALK_DEPTH) -> None:
        self.max_depth = max_depth

    def extract_structured_data(self, soup: BeautifulSoup) -> list[Any]:
        """Parse every ``application/ld+json`` block.

        Malformed blocks are skipped so one bad block never hides the others.

        Args:
            soup: Parsed page.

        Returns:
            Parsed records in document order.
        """
        records: list[Any] = []
        scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
        for index, script in enumerate(scripts):
            raw = script.string if script.string is not None else script.get_text()
            if not raw or not raw.strip():
                continue
            try:
                records.append(json.loads(raw))
            except json.JSONDecodeError as e:
                logger.debug("Skipping malformed JSON-LD block #%d: %s", index, e)
        return records

    def extract_metadata(self, soup: BeautifulSoup) -> PageMetadata:
        """Read title, description and social-card fields.

        Args:
            soup: Parsed page (unmodified, so header tags are still present).

        Returns:
            PageMetadata with resolved title and description.
        """
        og_title = _meta_content(soup, property="og:title")
        og_description = _meta_content(soup, property="og:description")
        meta_description = _meta_content(soup, name="description")

        title_tag = soup.find("title")
        title = clean_text(title_tag.get_text()).strip() if title_tag else ""
        if not title:
            title = og_title
        if not title:
            h1 = soup.find("h1")
            title = clean_text(h1.get_text()).strip() if h1 else ""

        return PageMetadata(
            title=title,
            description=meta_description or og_description,
            site_name=_meta_content(soup, property="og:site_name"),
            og_title=og_title,
            og_description=og_description,
            twitter_title=_meta_content(soup, name="twitter:title"),
            twitter_description=_meta_content(soup, name="twitter:description"),
            meta_description=meta_description,
            keywords=_meta_content(soup, name="keywords"),
        )

    def collect_text(self, records: list[Any]) -> str:
        """Collect allow-listed string values from JSON-LD records.

        Walks the records depth-first in document order. Nodes deeper than
        ``max_depth`` are ignored.

        Args:
            records: Parsed JSON-LD records.

        Returns:
            Collected strings joined by newlines.
        """
        texts: list[str] = []
        stack: list[tuple[Any, int]] = [(record, 0) for record in reversed(records)]

        while stack:
            node, depth = stack.pop()
            if depth > self.max_depth:
                continue

            if isinstance(node, dict):
                for key in TEXT_KEYS:
                    value = node.get(key)
                    if isinstance(value, str) and value:
                        texts.append(value)
                children = [v for v in node.values() if isinstance(v, dict | list)]
            elif isinstance(node, list):
                children = [v for v in node if isinstance(v, dict | list)]
            else:
                continue

            for child in reversed(children):
                stack.append((child, depth + 1))

        return "\n".join(texts)

    @staticmethod
    def meta_summary(metadata: PageMetadata) -> str:
        """Render the site/meta section used when rebuilding thin pages."""
        parts: list[str] = []
        if metadata.site_name:
            parts.append(f"Site name: {metadata.site_name}")
        title = metadata.og_title or metadata.twitter_title
        if title:
            parts.append(f"Title: {title}")
        description = (
            metadata.og_description or metadata.twitter_description or metadata.meta_description
        )
        if description:
            parts.append(f"Description: {description}")
        if metadata.keywords:
            parts.append(f"Keywords: {metadata.keywords}")
        return "\n".join(parts)
