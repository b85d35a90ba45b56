"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables (or a local .env file).
No secrets are hardcoded. Qdrant URL, Qdrant API key, collection name and
Gemini API key have no defaults: the service refuses to start without them.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from wayuu_search.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class GeminiSettings(BaseSettings):
    """Google Generative Language API access.

    Shared by the embedding service and the answer generator.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=".env",
        extra="ignore",
    )

    api_key: SecretStr = Field(description="Gemini API key")
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Generative Language API base URL",
    )


class EmbeddingSettings(BaseSettings):
    """Embedding service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        extra="ignore",
    )

    model: str = Field(
        default="text-embedding-004",
        description="Remote embedding model name",
    )
    remote_enabled: bool = Field(
        default=True,
        description="Call the remote model first (false = hash embeddings only)",
    )
    timeout: float = Field(
        default=15.0,
        description="Request timeout in seconds",
    )


class LLMSettings(BaseSettings):
    """Answer generation model configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        extra="ignore",
    )

    model: str = Field(
        default="gemini-1.5-flash",
        description="Model name to use for generation",
    )
    timeout: float = Field(
        default=60.0,
        description="Request timeout in seconds",
    )
    max_tokens: int | None = Field(
        default=None,
        description="Maximum output tokens (model default when unset)",
    )
    temperature: float | None = Field(
        default=None,
        description="Sampling temperature (model default when unset)",
    )


class QdrantSettings(BaseSettings):
    """Qdrant vector database configuration."""

    model_config = SettingsConfigDict(
        env_prefix="QDRANT_",
        env_file=".env",
        extra="ignore",
    )

    url: str = Field(description="Qdrant server URL")
    api_key: SecretStr = Field(description="Qdrant API key")
    collection_name: str = Field(description="Collection holding the corpus")
    vector_size: int = Field(
        default=384,
        gt=0,
        description="Dimensionality of the collection vectors",
    )
    max_limit: int = Field(
        default=10,
        gt=0,
        description="Hard ceiling on the number of hits per query",
    )
    timeout: int = Field(
        default=10,
        description="Request timeout in seconds",
    )


class SearchSettings(BaseSettings):
    """Search and context assembly tuning."""

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        extra="ignore",
    )

    context_results: int = Field(
        default=5,
        gt=0,
        description="Results rendered into the grounding context",
    )
    max_passage_chars: int = Field(
        default=800,
        gt=0,
        description="Characters of passage text kept per context block",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # API settings
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host",
    )
    api_port: int = Field(
        default=3000,
        description="API server port",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # Nested settings
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ConfigurationError: If a required setting is missing or invalid.
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        fields = [
            ".".join(str(part) for part in err["loc"]) for err in e.errors()
        ]
        raise ConfigurationError(
            f"Invalid or missing configuration in {e.title}: {', '.join(fields)}",
            details={"section": e.title, "fields": fields},
        ) from e
