from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid at startup."""


_PROVIDER_LABELS = {
    "gemini": "google-gemini",
    "openai": "openai",
    "openai_compatible": "openai-compatible",
    "openrouter": "openrouter",
    "groq": "groq",
    "together": "together",
    "deepseek": "deepseek",
    "ollama": "ollama",
    "example": "example",
}

# Local servers that accept any key.
_KEYLESS_PROVIDERS = frozenset({"example", "ollama"})


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 5004
    cors_allowed_origins: str = "http://localhost:3000"
    max_upload_size_mb: int = Field(default=25, ge=1)
    processing_mode: str = "async"

    database_url: str = ""
    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "contracts"
    db_username: str = "contracts"
    db_password: str = "secret"
    db_pool_max_size: int = Field(default=10, ge=1)

    pdf_engine: str = "pdfplumber"

    extraction_provider: str = "gemini"
    extraction_temperature: float = 0.1
    fields_max_output_tokens: int = 2048
    submittals_max_output_tokens: int = 1024
    provider_requests_per_minute: float = Field(default=4.0, ge=0)
    quota_retry_after_seconds: int = 3600

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-2.5-flash"

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_base_url: str = ""
    openai_timeout_seconds: int = 60
    openai_max_retries: int = 3

    chunk_max_chars: int = Field(default=60000, gt=0)
    chunk_overlap_chars: int = Field(default=300, ge=0)

    worker_concurrency: int = Field(default=1, ge=1)

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def is_async(self) -> bool:
        return self.processing_mode.lower() != "sync"

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def provider(self) -> str:
        return self.extraction_provider.lower()

    @property
    def provider_label(self) -> str:
        """Human-readable provider name reported by the health endpoint."""
        return _PROVIDER_LABELS.get(self.provider, self.provider)

    @property
    def model_name(self) -> str:
        if self.provider == "gemini":
            return self.gemini_model_name
        if self.provider == "example":
            return "example"
        return self.openai_model_name

    @property
    def min_call_interval_seconds(self) -> float:
        """Spacing between provider calls derived from the per-minute budget."""
        if self.provider_requests_per_minute <= 0:
            return 0.0
        return 60.0 / self.provider_requests_per_minute

    @property
    def conninfo(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"host={self.db_host} "
            f"port={self.db_port} "
            f"dbname={self.db_database} "
            f"user={self.db_username} "
            f"password={self.db_password}"
        )

    def require_provider_credentials(self) -> None:
        """Fail fast when the selected provider cannot be used.

        Raises:
            ConfigurationError: unknown provider, missing API key, or
                openai_compatible without a base URL.
        """
        if self.provider not in _PROVIDER_LABELS:
            raise ConfigurationError(
                f"Unknown extraction provider '{self.provider}'. "
                f"Choose from: {sorted(_PROVIDER_LABELS)}"
            )
        if self.processing_mode.lower() not in ("async", "sync"):
            raise ConfigurationError(
                f"processing_mode must be 'async' or 'sync', got '{self.processing_mode}'"
            )
        if self.provider in _KEYLESS_PROVIDERS:
            return
        if self.provider == "gemini":
            if not self.gemini_api_key:
                raise ConfigurationError("GEMINI_API_KEY is required for provider 'gemini'")
            return
        if not self.openai_api_key:
            raise ConfigurationError(
                f"OPENAI_API_KEY is required for provider '{self.provider}'"
            )
        if self.provider == "openai_compatible" and not self.openai_base_url.strip():
            raise ConfigurationError(
                "OPENAI_BASE_URL is required for provider 'openai_compatible'"
            )
