"""OpenAI model backend using chat completions."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openai import OpenAI

from ....core.domain.exceptions import BackendInvocationError, MissingAPIKeyError
from ....core.ports.llm_port import ModelBackend

logger = logging.getLogger(__name__)


class OpenAIBackend(ModelBackend):
    """One OpenAI chat model as an analysis candidate."""

    def __init__(self, api_key: str, model: str, temperature: float = 0.3) -> None:
        self.api_key = api_key
        self.model_name = model
        self.name = model
        self.temperature = temperature
        self._client = None

    def _get_client(self) -> "OpenAI":
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError("OpenAI API key not set. Set OPENAI_API_KEY.")

            from openai import OpenAI

            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def invoke(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except Exception as e:
            raise BackendInvocationError(
                f"OpenAI model {self.model_name} failed: {e}",
                cause=e,
                context={"model": self.model_name},
            ) from e

        return response.choices[0].message.content or ""
