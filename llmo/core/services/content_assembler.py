"""Rebuild thin pages from their metadata."""

import logging

from ..domain import PageMetadata

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 100


class ContentAssembler:
    """Substitute a labelled metadata document for near-empty content.

    Sections are added in a fixed priority order and the original text is
    always kept as the last section when it is not empty.
    """

    def __init__(self, min_content_length: int = MIN_CONTENT_LENGTH) -> None:
        self.min_content_length = min_content_length

    def needs_assembly(self, content: str) -> bool:
        return len(content) < self.min_content_length

    def assemble(
        self,
        content: str,
        metadata: PageMetadata,
        meta_summary: str = "",
        structured_text: str = "",
    ) -> str:
        """Return ``content`` unchanged, or an assembled substitute if too short.

        Args:
            content: Extracted main content.
            metadata: Page metadata (title and description are used).
            meta_summary: Rendered site/meta section.
            structured_text: Text collected from JSON-LD.

        Returns:
            Text to analyse.
        """
        if not self.needs_assembly(content):
            return content

        sections: list[str] = []
        if metadata.title:
            sections.append(f"[Title] {metadata.title}")
        if metadata.description:
            sections.append(f"[Summary] {metadata.description}")
        if meta_summary:
            sections.append(f"[Meta]\n{meta_summary}")
        if structured_text:
            sections.append(f"[Structured Data]\n{structured_text}")
        if content:
            sections.append(f"[Page Text]\n{content}")

        assembled = "\n\n".join(sections)
        logger.info(
            "Content too short (%d chars); assembled %d chars from %d metadata sections",
            len(content),
            len(assembled),
            len(sections),
        )
        return assembled
