"""Application configuration using Pydantic Settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImportPolicy(StrEnum):
    """What a bulk import does with records that fail validation."""

    PERSIST = "persist"
    SKIP = "skip"
    REJECT = "reject"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="SayHello API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Backend (Supabase Postgres)
    database_url: str = Field(
        default="",
        description="PostgreSQL connection URL (e.g. postgresql://user@db.xyz.supabase.co/postgres)",
    )
    database_key: str = Field(
        default="",
        description="Access key for the backend, sent as the connection password",
    )

    # Directory
    page_size: int = Field(default=6, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    import_policy: ImportPolicy = Field(
        default=ImportPolicy.PERSIST,
        description="Handling of imported records that fail validation",
    )
    export_filename: str = Field(default="sayhello-profiles.json")
    contact_subject: str = Field(default="SayHello · Language Exchange")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def backend_configured(self) -> bool:
        """Both the endpoint and the access key are present."""
        return bool(self.database_url and self.database_key)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Supabase supplies a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
