"""LLMO Checker - diagnose how findable a web page is for RAG-based AI search."""

__version__ = "1.0.0"
