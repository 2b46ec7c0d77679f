"""Configuration management for CV Customizer."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ProviderName = Literal["openai", "anthropic", "mistral", "google"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CV_CUSTOMIZER_",
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Keys (no prefix, standard env vars)
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    anthropic_api_key: str | None = Field(default=None, alias="ANTHROPIC_API_KEY")
    mistral_api_key: str | None = Field(default=None, alias="MISTRAL_API_KEY")
    google_api_key: str | None = Field(default=None, alias="GOOGLE_API_KEY")

    # Provider configuration
    provider: ProviderName = "openai"
    model: str = "gpt-4o"
    request_timeout: float = Field(
        default=120.0,
        ge=10,
        le=600,
        description="Timeout in seconds for a single generation call",
    )

    # Uploads
    max_document_bytes: int = Field(
        default=20 * 1024 * 1024,
        ge=1024,
        description="Largest accepted CV or requirement document",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # LangSmith tracing (no prefix - standard env vars)
    langsmith_api_key: str | None = Field(default=None, alias="LANGSMITH_API_KEY")
    langsmith_tracing: bool = Field(default=False, alias="LANGSMITH_TRACING")
    langsmith_endpoint: str = Field(
        default="https://api.smith.langchain.com", alias="LANGSMITH_ENDPOINT"
    )
    langsmith_project: str = Field(default="cv-customizer", alias="LANGSMITH_PROJECT")

    @property
    def langsmith_enabled(self) -> bool:
        """Check if LangSmith tracing is enabled and configured."""
        return bool(self.langsmith_api_key and self.langsmith_tracing)

    def api_key_for(self, provider: str) -> str | None:
        """Return the configured API key for a provider, if any."""
        keys = {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
            "mistral": self.mistral_api_key,
            "google": self.google_api_key,
        }
        return keys.get(provider)

    def is_provider_available(self, provider: str) -> bool:
        """Check whether an API key is configured for the provider."""
        return bool(self.api_key_for(provider))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
