"""Content extraction exceptions for LLMO Checker."""

from .base import LLMOError


class ContentError(LLMOError):
    """Error while turning markup into analysable content."""

    error_code = "LLMO_CNT_001"


class InsufficientContentError(ContentError):
    """Extracted content is below the minimum length.

    The threshold is lower for script-rendered pages, which only expose
    metadata in their static markup.
    """

    error_code = "LLMO_CNT_002"
    user_message = "Not enough content could be extracted from the page."
    spa_user_message = (
        "This site renders its content with JavaScript, so not enough content could be "
        "retrieved. Please try a page that serves static HTML."
    )

    def __init__(
        self,
        message: str,
        *,
        is_spa: bool = False,
        content_length: int = 0,
        min_length: int = 0,
    ) -> None:
        super().__init__(
            message,
            context={
                "is_spa": is_spa,
                "content_length": content_length,
                "min_length": min_length,
            },
        )
        self.is_spa = is_spa
        self.content_length = content_length
        self.min_length = min_length
        if is_spa:
            self.user_message = self.spa_user_message
