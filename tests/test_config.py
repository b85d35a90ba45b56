"""Tests for application configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from wayuu_search.config import (
    EmbeddingSettings,
    Environment,
    GeminiSettings,
    LLMSettings,
    QdrantSettings,
    SearchSettings,
    Settings,
    get_settings,
)
from wayuu_search.exceptions import ConfigurationError, ErrorCode

REQUIRED_ENV = {
    "QDRANT_URL": "http://qdrant:6333",
    "QDRANT_API_KEY": "qdrant-secret",
    "QDRANT_COLLECTION_NAME": "wayuucollection",
    "GEMINI_API_KEY": "gemini-secret",
}


class TestGeminiSettings:
    """Tests for Gemini API configuration."""

    def test_api_key_is_secret(self) -> None:
        """API key should be masked when printed."""
        with patch.dict(os.environ, {"GEMINI_API_KEY": "gemini-secret"}):
            settings = GeminiSettings(_env_file=None)
        assert "gemini-secret" not in str(settings.api_key)
        assert settings.api_key.get_secret_value() == "gemini-secret"

    def test_default_base_url(self) -> None:
        """Default base URL targets the public API."""
        settings = GeminiSettings(_env_file=None, api_key="k")
        assert settings.base_url == "https://generativelanguage.googleapis.com/v1beta"

    def test_api_key_required(self) -> None:
        """Missing API key fails validation."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                GeminiSettings(_env_file=None)


class TestEmbeddingSettings:
    """Tests for embedding configuration."""

    def test_default_values(self) -> None:
        """Default values for embedding service."""
        settings = EmbeddingSettings(_env_file=None)
        assert settings.model == "text-embedding-004"
        assert settings.remote_enabled is True
        assert settings.timeout == 15.0

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(os.environ, {"EMBEDDING_REMOTE_ENABLED": "false"}):
            settings = EmbeddingSettings(_env_file=None)
            assert settings.remote_enabled is False


class TestLLMSettings:
    """Tests for LLM configuration."""

    def test_default_values(self) -> None:
        """Defaults leave sampling to the model."""
        settings = LLMSettings(_env_file=None)
        assert settings.model == "gemini-1.5-flash"
        assert settings.timeout == 60.0
        assert settings.max_tokens is None
        assert settings.temperature is None

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(os.environ, {"LLM_MODEL": "gemini-2.0-flash"}):
            settings = LLMSettings(_env_file=None)
            assert settings.model == "gemini-2.0-flash"


class TestQdrantSettings:
    """Tests for Qdrant configuration."""

    def test_loaded_from_env(self) -> None:
        """Required values are read from the environment."""
        with patch.dict(os.environ, REQUIRED_ENV):
            settings = QdrantSettings(_env_file=None)
        assert settings.url == "http://qdrant:6333"
        assert settings.collection_name == "wayuucollection"
        assert settings.vector_size == 384
        assert settings.max_limit == 10

    def test_api_key_is_secret(self) -> None:
        """API key should be masked."""
        with patch.dict(os.environ, REQUIRED_ENV):
            settings = QdrantSettings(_env_file=None)
        assert "qdrant-secret" not in str(settings.api_key)
        assert settings.api_key.get_secret_value() == "qdrant-secret"

    def test_missing_required_values(self) -> None:
        """URL, API key and collection name are mandatory."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                QdrantSettings(_env_file=None)

        missing = {err["loc"][0] for err in exc_info.value.errors()}
        assert missing == {"url", "api_key", "collection_name"}


class TestSearchSettings:
    """Tests for search tuning."""

    def test_default_values(self) -> None:
        """Context uses five results of at most 800 characters."""
        settings = SearchSettings(_env_file=None)
        assert settings.context_results == 5
        assert settings.max_passage_chars == 800


class TestSettings:
    """Tests for main application settings."""

    def test_default_environment(self) -> None:
        """Default environment is development."""
        with patch.dict(os.environ, REQUIRED_ENV):
            settings = Settings()
        assert settings.environment == Environment.DEVELOPMENT

    def test_nested_settings_loaded(self) -> None:
        """Nested settings are initialized."""
        with patch.dict(os.environ, REQUIRED_ENV):
            settings = Settings()
        assert isinstance(settings.gemini, GeminiSettings)
        assert isinstance(settings.embedding, EmbeddingSettings)
        assert isinstance(settings.llm, LLMSettings)
        assert isinstance(settings.qdrant, QdrantSettings)
        assert isinstance(settings.search, SearchSettings)

    def test_environment_enum(self) -> None:
        """Environment can be set via string."""
        with patch.dict(os.environ, {**REQUIRED_ENV, "ENVIRONMENT": "production"}):
            settings = Settings()
            assert settings.environment == Environment.PRODUCTION


class TestGetSettings:
    """Tests for settings singleton."""

    def test_returns_settings_instance(self) -> None:
        """get_settings returns a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_caching(self) -> None:
        """Settings are cached."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_missing_configuration_is_fatal(self) -> None:
        """Missing required values raise ConfigurationError."""
        get_settings.cache_clear()
        env = {k: v for k, v in os.environ.items() if k != "GEMINI_API_KEY"}
        try:
            with patch.dict(os.environ, env, clear=True):
                with pytest.raises(ConfigurationError) as exc_info:
                    get_settings()
        finally:
            get_settings.cache_clear()

        assert exc_info.value.code == ErrorCode.CONFIGURATION_ERROR
        assert "Invalid or missing configuration" in exc_info.value.message
