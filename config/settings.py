"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_echo: bool = False

    # OpenID Connect / Azure AD
    openid_config_url: str
    valid_audience: str
    valid_issuer: str
    client_id: str | None = None
    tenant_id: str | None = None
    http_timeout_seconds: float = 10.0

    # Timezone
    timezone: str = "Asia/Kolkata"

    # Logging
    log_level: str = "INFO"

    # CORS (comma separated)
    cors_origins: str = "*"

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


settings = Settings()
