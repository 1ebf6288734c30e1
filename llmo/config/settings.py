"""Configuration management for LLMO Checker."""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.exceptions import InvalidConfigurationError, MissingAPIKeyError

DEFAULT_ANALYSIS_MODELS = [
    "gemini-2.0-flash",
    "gemini-2.5-flash",
    "gemini-2.0-flash-lite",
    "gemini-2.0-flash-001",
    "gemini-2.5-pro",
]


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets pasted into dashboards or .env files sometimes carry a BOM,
    which breaks HTTP headers and query strings.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    google_api_key: str = ""
    openai_api_key: str = ""
    qdrant_url: str = ""
    qdrant_api_key: str = ""

    @field_validator(
        "google_api_key", "openai_api_key", "qdrant_api_key", "qdrant_url", mode="after"
    )
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Providers (resolved once at startup, never by sniffing for keys)
    embedding_provider: Literal["gemini", "openai"] = "gemini"
    embedding_model: str = "gemini-embedding-001"
    openai_embedding_model: str = "text-embedding-3-small"
    llm_provider: Literal["gemini", "openai"] = "gemini"
    analysis_models: list[str] = DEFAULT_ANALYSIS_MODELS

    # Analysis settings
    analysis_temperature: float = 0.3
    analysis_language: str = "English"
    analysis_skip_on_any_error: bool = False

    # Pipeline settings
    embedding_max_chars: int = 8000
    min_content_length: int = 100
    min_spa_content_length: int = 50
    content_preview_length: int = 500
    fetch_timeout: float = 30.0
    fetch_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Storage
    store_backend: Literal["sqlite", "qdrant", "none"] = "sqlite"
    database_path: Path = Path("./data/llmo.db")
    qdrant_collection: str = "analysis_logs"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    debug: bool = False

    @field_validator("analysis_models", mode="after")
    @classmethod
    def strip_model_names(cls, value: list[str]) -> list[str]:
        """Drop blank entries from the model preference list."""
        return [name.strip() for name in value if name and name.strip()]

    def resolve_model(self, entry: str) -> tuple[str, str]:
        """Split a preference entry into (provider, model).

        Entries may be prefixed with ``gemini:`` or ``openai:``; bare names
        use the configured ``llm_provider``.
        """
        if ":" in entry:
            provider, model = entry.split(":", 1)
            provider = provider.strip().lower()
            if provider not in ("gemini", "openai"):
                raise InvalidConfigurationError(
                    f"Unknown model provider '{provider}' in analysis_models",
                    context={"entry": entry},
                )
            return provider, model.strip()
        return self.llm_provider, entry

    def validate_providers(self) -> None:
        """Fail fast when the active providers have no credentials."""
        if self.embedding_provider == "gemini" and not self.google_api_key:
            raise MissingAPIKeyError(
                "GOOGLE_API_KEY is not set (required by embedding_provider=gemini)"
            )
        if self.embedding_provider == "openai" and not self.openai_api_key:
            raise MissingAPIKeyError(
                "OPENAI_API_KEY is not set (required by embedding_provider=openai)"
            )
        if self.store_backend == "qdrant" and not self.qdrant_url:
            raise MissingAPIKeyError("QDRANT_URL is not set (required by store_backend=qdrant)")

    def ensure_directories(self) -> None:
        """Create the local database directory if it doesn't exist."""
        if self.store_backend == "sqlite":
            self.database_path.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
