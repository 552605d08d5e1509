"""Configuration management for the Energy Accounts API."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service Configuration
    environment: str = Field(default="development", description="Environment name")
    service_name: str = Field(default="energy-accounts-api", description="Service name")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3001, description="Listen port")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Origins allowed by CORS"
    )

    # Simulated upstream behaviour
    data_source_latency_ms: int = Field(
        default=300, description="Simulated latency of the account and due charge sources"
    )
    payment_processing_delay_ms: int = Field(
        default=1000, description="Simulated payment processor delay in milliseconds"
    )
    payment_history_delay_ms: int = Field(
        default=500, description="Simulated payment history read delay in milliseconds"
    )

    # Legacy routes
    legacy_history_account_id: str = Field(
        default="A-0001", description="Account served by GET /api/payments"
    )

    # HTTP client defaults
    api_base_url: str = Field(
        default="http://localhost:3001/api", description="Base URL used by the API client"
    )
    api_timeout_seconds: float = Field(default=10.0, description="API client request timeout")


# Global settings instance
settings = Settings()
