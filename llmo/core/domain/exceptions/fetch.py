"""Page fetch exceptions for LLMO Checker."""

from .base import LLMOError


class FetchError(LLMOError):
    """The target URL could not be fetched.

    Common causes:
    - DNS or connection failure
    - Timeout
    - Non-2xx HTTP status
    """

    error_code = "LLMO_FET_001"
    user_message = (
        "Could not access the URL. Please check that it is correct and publicly reachable."
    )


class FetchHTTPError(FetchError):
    """The server answered with a non-2xx status."""

    error_code = "LLMO_FET_002"


class NonHTMLContentError(FetchError):
    """The URL does not serve an HTML document."""

    error_code = "LLMO_FET_003"
    user_message = "The URL does not return an HTML page. Please enter the URL of a web page."
