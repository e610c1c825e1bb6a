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
        BILLNOTES_DB_HOST: Database host (default: localhost)
        BILLNOTES_DB_PORT: Database port (default: 5432)
        BILLNOTES_DB_DATABASE: Database name (default: billnotes)
        BILLNOTES_DB_USERNAME: Database user (default: billnotes)
        BILLNOTES_DB_PASSWORD: Database password (required in production)
        BILLNOTES_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        BILLNOTES_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        BILLNOTES_DB_ECHO: Log every SQL statement (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="BILLNOTES_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="billnotes", description="Database name")
    username: str = Field(default="billnotes", description="Database username")
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
    echo: bool = Field(default=False, description="Echo SQL statements")

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


class OIDCSettings(BaseSettings):
    """Identity provider settings used to validate bearer tokens.

    The audience is the application id the IdP's token template mints
    tokens for; tokens issued for any other audience are rejected.

    Environment variables:
        BILLNOTES_OIDC_ISSUER_URL: JWT issuer domain of the IdP
        BILLNOTES_OIDC_AUDIENCE: Expected audience claim (default: billnotes)
        BILLNOTES_OIDC_USER_ID_CLAIM: Claim carrying the subject (default: sub)
        BILLNOTES_OIDC_NAME_CLAIM: Claim carrying the display name (default: name)
        BILLNOTES_OIDC_EMAIL_CLAIM: Claim carrying the email (default: email)
        BILLNOTES_OIDC_JWKS_CACHE_TTL_SECONDS: JWKS cache lifetime (default: 3600)
    """

    model_config = SettingsConfigDict(
        env_prefix="BILLNOTES_OIDC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    issuer_url: str = Field(
        default="http://localhost:8080/realms/billnotes",
        description="JWT issuer domain",
    )
    audience: str = Field(default="billnotes", description="Expected audience")
    user_id_claim: str = Field(default="sub", description="Subject claim")
    name_claim: str = Field(default="name", description="Display name claim")
    email_claim: str = Field(default="email", description="Email claim")
    jwks_cache_ttl_seconds: int = Field(
        default=3600,
        description="How long fetched signing keys are reused",
        ge=0,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="BILLNOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Billnotes API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def oidc(self) -> OIDCSettings:
        """Get identity provider settings."""
        return get_oidc_settings()


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
def get_oidc_settings() -> OIDCSettings:
    """Get cached identity provider settings."""
    return OIDCSettings()
