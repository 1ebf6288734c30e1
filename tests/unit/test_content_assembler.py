"""Unit tests for ContentAssembler."""

import pytest

from llmo.core.domain import PageMetadata
from llmo.core.services.content_assembler import ContentAssembler

pytestmark = pytest.mark.unit


class TestContentAssembler:
    """Tests for rebuilding thin pages from metadata."""

    def test_empty_content_uses_title_and_description(self):
        result = ContentAssembler().assemble("", PageMetadata(title="T", description="D"))

        assert result
        assert "T" in result
        assert "D" in result
        assert "[Page Text]" not in result

    def test_sections_in_priority_order(self):
        result = ContentAssembler().assemble(
            "short body",
            PageMetadata(title="Title", description="Desc"),
            meta_summary="Site name: Acme",
            structured_text="Acme\nWidgets",
        )

        assert result == (
            "[Title] Title\n\n"
            "[Summary] Desc\n\n"
            "[Meta]\nSite name: Acme\n\n"
            "[Structured Data]\nAcme\nWidgets\n\n"
            "[Page Text]\nshort body"
        )

    def test_long_content_is_unchanged(self):
        content = "y" * 100
        assert ContentAssembler().assemble(content, PageMetadata(title="T")) == content

    def test_needs_assembly_threshold(self):
        assembler = ContentAssembler(min_content_length=5)
        assert assembler.needs_assembly("abcd") is True
        assert assembler.needs_assembly("abcde") is False

    def test_nothing_available_gives_empty_string(self):
        assert ContentAssembler().assemble("", PageMetadata()) == ""
