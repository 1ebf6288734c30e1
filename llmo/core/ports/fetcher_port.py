"""Page Fetcher Port Interface."""

from abc import ABC, abstractmethod


class FetcherPort(ABC):
    """Abstract interface for retrieving raw page markup."""

    @abstractmethod
    def fetch(self, url: str) -> str:
        """Fetch a URL and return its HTML.

        Raises:
            FetchError: Transport failure or non-2xx status.
            NonHTMLContentError: Response is not ``text/html``.
        """
        ...
