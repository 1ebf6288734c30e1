"""
Pytest configuration and shared fixtures.
"""

import pytest

from llmo.core.domain import AnalysisResult, CategoryScore, ExtractedDocument
from llmo.core.ports import EmbeddingPort, FetcherPort, ModelBackend


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (in-process API)")
    config.addinivalue_line("markers", "slow: Slow tests (network, large data)")


ARTICLE_TEXT = (
    "Retrieval-augmented generation combines a search index with a language model. "
    "The retriever finds passages relevant to the question and the model answers "
    "using only those passages, citing them as sources."
)

VALID_MODEL_RESPONSE = """Here is the evaluation:
{
  "overallScore": 72,
  "comprehensiveness": {"score": 70, "feedback": "Covers the basics."},
  "structuredData": {"score": 40, "feedback": "No JSON-LD."},
  "primarySource": {"score": 65, "feedback": "Some original explanation."},
  "improvements": ["Add JSON-LD", "Add an FAQ section", "Answer the question directly"],
  "summary": "A reasonable page that could be cited."
}
Hope this helps."""


class FakeFetcher(FetcherPort):
    """Returns fixed markup and counts calls."""

    def __init__(self, html: str) -> None:
        self.html = html
        self.calls: list[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        return self.html


class FakeEmbedding(EmbeddingPort):
    """Deterministic vectors keyed on text length."""

    name = "fake"

    def __init__(self, configured: bool = True, vector: list[float] | None = None) -> None:
        self.configured = configured
        self.vector = vector
        self.calls: list[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.vector is not None:
            return list(self.vector)
        return [1.0, float(len(text) % 7), 0.5]


class FakeBackend(ModelBackend):
    """Model backend that returns a fixed response or raises."""

    def __init__(self, name: str, response: str = VALID_MODEL_RESPONSE, error=None) -> None:
        self.name = name
        self.response = response
        self.error = error
        self.calls = 0

    def invoke(self, prompt: str) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def article_html():
    """Page with a long article, navigation noise and JSON-LD."""
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>What is RAG?</title>
  <meta name="description" content="A practical guide to retrieval-augmented generation.">
  <meta property="og:site_name" content="Example Docs">
  <script type="application/ld+json">
    {{"@type": "Article", "headline": "What is RAG?", "author": {{"name": "Ada"}}}}
  </script>
</head>
<body>
  <nav>Home | Docs | Blog | Contact</nav>
  <article>
    <h1>What is RAG?</h1>
    <p>{ARTICLE_TEXT}</p>
    <h2>How retrieval works</h2>
    <p>Documents are embedded and stored in a vector index.</p>
  </article>
  <footer>Copyright Example Docs</footer>
</body>
</html>"""


@pytest.fixture
def spa_html():
    """Client-rendered shell: a root container and almost no text."""
    return """<html>
<head>
  <title>Shop</title>
  <meta property="og:title" content="Shop - Handmade goods">
  <meta property="og:description" content="Handmade ceramics shipped worldwide.">
</head>
<body><div id="root"></div><script src="/bundle.js"></script></body>
</html>"""


@pytest.fixture
def thin_html():
    """Static page with 40 characters of text and no metadata."""
    return "<html><body><p>" + "x" * 40 + "</p></body></html>"


@pytest.fixture
def sample_document():
    """Extracted document used by scoring and engine tests."""
    return ExtractedDocument(
        title="What is RAG?",
        description="A practical guide to retrieval-augmented generation for beginners.",
        main_content=ARTICLE_TEXT,
        headings=("What is RAG?", "How retrieval works"),
        structured_data=({"@type": "Article"},),
        has_structured_data=True,
        word_count=len(ARTICLE_TEXT),
    )


@pytest.fixture
def sample_analysis():
    """A valid analysis result."""
    return AnalysisResult(
        overall_score=72,
        comprehensiveness=CategoryScore(score=70, feedback="Covers the basics."),
        structured_data=CategoryScore(score=40, feedback="No JSON-LD."),
        primary_source=CategoryScore(score=65, feedback="Some original explanation."),
        improvements=["Add JSON-LD"],
        summary="A reasonable page that could be cited.",
    )


@pytest.fixture
def make_backend():
    """Factory for fake model backends."""
    return FakeBackend


@pytest.fixture
def make_fetcher():
    """Factory for fake fetchers."""
    return FakeFetcher


@pytest.fixture
def make_embedding():
    """Factory for fake embedding backends."""
    return FakeEmbedding
