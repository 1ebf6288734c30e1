"""Page fetchers."""

from .http_fetcher import RequestsFetcher

__all__ = ["RequestsFetcher"]
