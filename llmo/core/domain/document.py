"""Page metadata and extracted document models."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PageMetadata:
    """Site-level metadata read from the unmodified markup.

    Attributes:
        title: Resolved page title (<title>, then og:title, then first <h1>).
        description: Resolved description (meta description, then og:description).
        site_name: og:site_name.
        og_title: og:title.
        og_description: og:description.
        twitter_title: twitter:title.
        twitter_description: twitter:description.
        meta_description: Plain <meta name="description">.
        keywords: <meta name="keywords">.
    """

    title: str = ""
    description: str = ""
    site_name: str = ""
    og_title: str = ""
    og_description: str = ""
    twitter_title: str = ""
    twitter_description: str = ""
    meta_description: str = ""
    keywords: str = ""


@dataclass(frozen=True)
class ExtractedDocument:
    """Analysable content extracted from one page.

    Built once per diagnosis request and never mutated afterwards.

    Attributes:
        title: Page title.
        description: Page description.
        main_content: Primary text, or the assembled substitute for thin pages.
        headings: h1-h6 texts in document order.
        structured_data: Parsed JSON-LD blocks.
        has_structured_data: Whether any JSON-LD block parsed.
        word_count: Character length of ``main_content`` (used as a length proxy).
        is_spa: Whether the page looks script-rendered.
    """

    title: str
    description: str
    main_content: str
    headings: tuple[str, ...] = ()
    structured_data: tuple[Any, ...] = ()
    has_structured_data: bool = False
    word_count: int = 0
    is_spa: bool = False
