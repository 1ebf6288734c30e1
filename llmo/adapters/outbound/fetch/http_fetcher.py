"""HTTP page fetcher built on requests."""

import logging

import requests

from ....core.domain.exceptions import FetchError, FetchHTTPError, NonHTMLContentError
from ....core.ports.fetcher_port import FetcherPort

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class RequestsFetcher(FetcherPort):
    """Fetch one page with browser-like headers."""

    def __init__(self, timeout: float = 30.0, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.9,ja;q=0.8",
            }
        )

    def fetch(self, url: str) -> str:
        """Fetch a URL and return its HTML.

        Raises:
            FetchHTTPError: Non-2xx status.
            NonHTMLContentError: Response is not ``text/html``.
            FetchError: Connection failure or timeout.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else 0
            raise FetchHTTPError(
                f"HTTP {status} fetching {url}",
                cause=e,
                context={"url": url, "status": status},
            ) from e
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}", cause=e, context={"url": url}) from e

        content_type = response.headers.get("Content-Type", "")
        if "text/html" not in content_type:
            raise NonHTMLContentError(
                f"Unexpected content type: {content_type or '<none>'}",
                context={"url": url, "content_type": content_type},
            )

        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return response.text
