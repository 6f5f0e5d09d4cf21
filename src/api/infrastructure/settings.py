"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        PULSE_DB_HOST: Database host (default: localhost)
        PULSE_DB_PORT: Database port (default: 5432)
        PULSE_DB_DATABASE: Database name (default: pulse)
        PULSE_DB_USERNAME: Database user (default: pulse)
        PULSE_DB_PASSWORD: Database password (required in production)
        PULSE_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        PULSE_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="PULSE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="pulse", description="Database name")
    username: str = Field(default="pulse", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class IAMSettings(BaseSettings):
    """Identity and access configuration.

    Variables carry no prefix so existing deployments keep working.

    Environment variables:
        GOOGLE_CLIENT_ID: Expected token audience; unset skips the check
        ADMIN_EMAILS: Comma-separated single-tenant admin list
        SUPER_ADMIN_EMAILS: Comma-separated super-admin list
            (falls back to ADMIN_EMAILS when unset or blank)
        ALLOWED_DOMAINS: Comma-separated domains eligible for
            self-service workspace creation
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    google_client_id: str | None = Field(
        default=None, description="OAuth client id tokens must be issued for"
    )
    admin_emails: str | None = Field(
        default=None, description="Comma-separated admin emails"
    )
    super_admin_emails: str | None = Field(
        default=None, description="Comma-separated super admin emails"
    )
    allowed_domains: str = Field(
        default="kubapay.com,vixtechnology.com,voqa.com",
        description="Comma-separated domains eligible for workspace creation",
    )


class IdentityProviderSettings(BaseSettings):
    """Identity provider (token verification) settings.

    Environment variables:
        PULSE_IDP_TOKENINFO_URL: Token verification endpoint
        PULSE_IDP_TIMEOUT_SECONDS: Upper bound for one verification call
    """

    model_config = SettingsConfigDict(
        env_prefix="PULSE_IDP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tokeninfo_url: str = Field(
        default="https://oauth2.googleapis.com/tokeninfo",
        description="Token verification endpoint",
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for the verification call",
        gt=0,
        le=60,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Pulse API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def iam(self) -> IAMSettings:
        """Get identity and access settings."""
        return get_iam_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_iam_settings() -> IAMSettings:
    """Get cached identity and access settings."""
    return IAMSettings()


@lru_cache
def get_identity_provider_settings() -> IdentityProviderSettings:
    """Get cached identity provider settings."""
    return IdentityProviderSettings()
