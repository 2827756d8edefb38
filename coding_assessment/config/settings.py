"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading. Settings are read
once per process; mode flags are not reconfigurable at runtime.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Coding Assessment Service"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Upstream text-generation service (OpenAI-compatible serving endpoint)
    llm_host: str = ""
    llm_token: str = ""

    # Model endpoints
    generation_endpoint: str = "/serving-endpoints/databricks-gemini-3-pro/invocations"
    review_endpoint: str = "/serving-endpoints/databricks-gemini-3-pro/invocations"

    # Generation parameters
    generation_max_tokens: int = 8192
    generation_temperature: float = 0.7
    review_max_tokens: int = 4096
    review_temperature: float = 0.3
    llm_timeout_seconds: float = Field(default=60.0, gt=0)

    # Mode flags (MOCK / FALLBACK per operation family)
    coding_questions_mock_mode: bool = False
    coding_questions_fallback_to_mock: bool = False
    coding_review_mock_mode: bool = False
    coding_review_fallback_to_mock: bool = False

    # Resume handling
    min_resume_chars: int = 100
    resume_storage_dir: str = "resumes"

    # Langfuse tracing
    langfuse_enabled: bool = False
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    # CORS - stored as comma-separated string in env
    # Uses validation_alias to read from CORS_ORIGINS env var
    cors_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def llm_configured(self) -> bool:
        """Whether credentials for the upstream service are present."""
        return bool(self.llm_host.strip() and self.llm_token.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
