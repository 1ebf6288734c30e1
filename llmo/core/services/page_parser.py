"""Turn raw markup into an ExtractedDocument."""

import logging

from bs4 import BeautifulSoup

from ..domain import ExtractedDocument
from .content_assembler import ContentAssembler
from .content_extractor import ContentExtractor
from .spa_detector import SPADetector
from .structured_data import StructuredDataExtractor

logger = logging.getLogger(__name__)


class PageParser:
    """Run the extraction stages over one page.

    The page is parsed once. Structured data, metadata and SPA markers are
    read from that tree as-is; the content extractor works on its own copy,
    so stage order does not change what each stage sees.
    """

    def __init__(
        self,
        structured_data: StructuredDataExtractor | None = None,
        content_extractor: ContentExtractor | None = None,
        spa_detector: SPADetector | None = None,
        assembler: ContentAssembler | None = None,
    ) -> None:
        self.structured_data = structured_data or StructuredDataExtractor()
        self.content_extractor = content_extractor or ContentExtractor()
        self.spa_detector = spa_detector or SPADetector()
        self.assembler = assembler or ContentAssembler()

    def parse(self, html: str) -> ExtractedDocument:
        """Extract the analysable document from markup.

        Args:
            html: Raw page HTML.

        Returns:
            Immutable ExtractedDocument.
        """
        soup = BeautifulSoup(html, "lxml")

        metadata = self.structured_data.extract_metadata(soup)
        records = self.structured_data.extract_structured_data(soup)
        extraction = self.content_extractor.extract(soup)

        is_spa = self.spa_detector.is_spa(soup, extraction.main_content)

        main_content = extraction.main_content
        if self.assembler.needs_assembly(main_content):
            main_content = self.assembler.assemble(
                main_content,
                metadata,
                meta_summary=self.structured_data.meta_summary(metadata),
                structured_text=self.structured_data.collect_text(records),
            )

        logger.info(
            "Extracted %d chars, %d headings, %d JSON-LD blocks (SPA: %s)",
            len(main_content),
            len(extraction.headings),
            len(records),
            is_spa,
        )

        return ExtractedDocument(
            title=metadata.title,
            description=metadata.description,
            main_content=main_content,
            headings=extraction.headings,
            structured_data=tuple(records),
            has_structured_data=bool(records),
            word_count=len(main_content),
            is_spa=is_spa,
        )
