"""Unit tests for Settings."""

import pytest

from llmo.config.settings import DEFAULT_ANALYSIS_MODELS, Settings
from llmo.core.domain.exceptions import InvalidConfigurationError, MissingAPIKeyError

pytestmark = pytest.mark.unit


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:
    """Tests for configuration parsing and validation."""

    def test_defaults(self):
        config = _settings()

        assert config.analysis_models == DEFAULT_ANALYSIS_MODELS
        assert config.analysis_temperature == 0.3
        assert config.embedding_max_chars == 8000
        assert config.min_content_length == 100
        assert config.min_spa_content_length == 50
        assert config.content_preview_length == 500

    def test_secrets_are_sanitized(self):
        config = _settings(google_api_key="\ufeff  secret-key \n")
        assert config.google_api_key == "secret-key"

    def test_blank_model_names_dropped(self):
        config = _settings(analysis_models=[" gemini-2.0-flash ", "", "  "])
        assert config.analysis_models == ["gemini-2.0-flash"]

    def test_analysis_models_from_env(self, monkeypatch):
        monkeypatch.setenv("ANALYSIS_MODELS", '["openai:gpt-4o-mini", "gemini-2.5-flash"]')
        config = _settings()
        assert config.analysis_models == ["openai:gpt-4o-mini", "gemini-2.5-flash"]

    def test_resolve_model(self):
        config = _settings(llm_provider="gemini")

        assert config.resolve_model("gemini-2.0-flash") == ("gemini", "gemini-2.0-flash")
        assert config.resolve_model("openai:gpt-4o-mini") == ("openai", "gpt-4o-mini")
        assert config.resolve_model("Gemini: gemini-2.5-pro") == ("gemini", "gemini-2.5-pro")

    def test_resolve_unknown_provider(self):
        with pytest.raises(InvalidConfigurationError):
            _settings().resolve_model("anthropic:some-model")

    def test_validate_providers_requires_active_key(self):
        with pytest.raises(MissingAPIKeyError):
            _settings(embedding_provider="gemini", google_api_key="").validate_providers()

        with pytest.raises(MissingAPIKeyError):
            _settings(embedding_provider="openai", openai_api_key="").validate_providers()

        _settings(embedding_provider="openai", openai_api_key="sk-test").validate_providers()

    def test_qdrant_store_requires_url(self):
        config = _settings(google_api_key="k", store_backend="qdrant", qdrant_url="")
        with pytest.raises(MissingAPIKeyError):
            config.validate_providers()

    def test_ensure_directories(self, tmp_path):
        config = _settings(database_path=tmp_path / "nested" / "llmo.db")
        config.ensure_directories()
        assert (tmp_path / "nested").is_dir()
