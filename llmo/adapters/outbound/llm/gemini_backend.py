"""Google Gemini model backend using the google-genai SDK."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google import genai

from ....core.domain.exceptions import BackendInvocationError, MissingAPIKeyError
from ....core.domain.utils import clean_text
from ....core.ports.llm_port import ModelBackend

logger = logging.getLogger(__name__)


class GeminiBackend(ModelBackend):
    """One Gemini model as an analysis candidate."""

    def __init__(self, api_key: str, model: str, temperature: float = 0.3) -> None:
        """Initialize the backend.

        Args:
            api_key: Google AI API key.
            model: Model to call (e.g. gemini-2.0-flash).
            temperature: Sampling temperature.
        """
        self.api_key = api_key
        self.model_name = model
        self.name = model
        self.temperature = temperature
        self._client = None

    def _get_client(self) -> "genai.Client":
        """Lazy load the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError(
                    "Google API key not set. Set GOOGLE_API_KEY in your .env file."
                )

            from google import genai

            self._client = genai.Client(api_key=self.api_key)
            logger.debug("Gemini client initialized for model: %s", self.model_name)

        return self._client

    def invoke(self, prompt: str) -> str:
        """Send the prompt and return the response text.

        Raises:
            BackendInvocationError: The SDK call failed. The original message
                is kept so quota and not-found errors can be recognised.
        """
        from google.genai.types import GenerateContentConfig

        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self.model_name,
                contents=clean_text(prompt),
                config=GenerateContentConfig(temperature=self.temperature),
            )
        except Exception as e:
            raise BackendInvocationError(
                f"Gemini model {self.model_name} failed: {e}",
                cause=e,
                context={"model": self.model_name},
            ) from e

        return response.text or ""
