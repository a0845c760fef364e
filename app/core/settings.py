# ==============================================================================
# SETTINGS CONFIGURATION - Environment Management
# ==============================================================================
# Pydantic Settings for type-safe environment variable management
# Engine selection: DATABASE_URL present -> PostgreSQL, absent -> SQLite file
# ==============================================================================

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseType(str, Enum):
    """
    Supported database engines.

    Attributes:
        SQLITE: Embedded file-based engine for local development
        POSTGRESQL: Server-based engine for production
    """
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Application Settings Configuration.

    Manages all environment variables with type validation and defaults.
    Uses Pydantic BaseSettings for automatic .env file loading and
    environment variable parsing.

    The storage engine is never configured directly: the presence of
    ``DATABASE_URL`` selects PostgreSQL, its absence selects the SQLite
    file at ``SQLITE_PATH``.

    Example:
        >>> from app.core.settings import settings
        >>> settings.database_type
        <DatabaseType.SQLITE: 'sqlite'>
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # --------------------------------------------------------------------------
    APP_NAME: str = Field(
        default="AR Surgical Hub API",
        description="Application display name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application semantic version"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (logs, stack traces)"
    )
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current deployment environment"
    )

    # --------------------------------------------------------------------------
    # API CONFIGURATION
    # --------------------------------------------------------------------------
    API_PREFIX: str = Field(
        default="/api",
        description="Route prefix for all API endpoints"
    )
    API_TITLE: str = Field(
        default="AR Surgical Hub API",
        description="OpenAPI documentation title"
    )
    API_DESCRIPTION: str = Field(
        default="Surgical equipment catalog, orders and back-office API",
        description="OpenAPI documentation description"
    )

    # --------------------------------------------------------------------------
    # DATABASE SELECTION
    # --------------------------------------------------------------------------
    DATABASE_URL: Optional[str] = Field(
        default=None,
        description="PostgreSQL DSN; when unset the embedded SQLite engine is used"
    )
    SQLITE_PATH: str = Field(
        default="./db.sqlite",
        description="SQLite database file path (or :memory:)"
    )

    # --------------------------------------------------------------------------
    # CONNECTION POOL SETTINGS (PostgreSQL only)
    # --------------------------------------------------------------------------
    DB_POOL_MIN_SIZE: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Minimum pooled PostgreSQL connections"
    )
    DB_POOL_MAX_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum pooled PostgreSQL connections"
    )
    DB_SSL: bool = Field(
        default=False,
        description="Negotiate TLS without certificate verification (hosted Postgres)"
    )

    # --------------------------------------------------------------------------
    # FIRST-RUN SEEDING
    # --------------------------------------------------------------------------
    ADMIN_EMAIL: str = Field(
        default="admin@arsurgical.com",
        description="Administrator account ensured at startup"
    )
    ADMIN_PASSWORD: str = Field(
        default="admin123",
        description="Password for a newly created administrator account"
    )
    ADMIN_FULL_NAME: str = Field(
        default="Admin User",
        description="Display name for a newly created administrator account"
    )
    ADMIN_PHONE: str = Field(
        default="+1 555 000 0000",
        description="Phone number for a newly created administrator account"
    )
    SEED_CATALOG: bool = Field(
        default=True,
        description="Seed reference catalog data into empty tables"
    )

    # --------------------------------------------------------------------------
    # SECURITY SETTINGS
    # --------------------------------------------------------------------------
    SECRET_KEY: str = Field(
        default="your-super-secret-key-change-in-production",
        min_length=32,
        description="JWT signing secret key (min 32 chars)"
    )
    ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=1440,
        ge=1,
        le=10080,
        description="Access token expiration in minutes"
    )
    BCRYPT_ROUNDS: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt work factor"
    )

    # --------------------------------------------------------------------------
    # CORS SETTINGS
    # --------------------------------------------------------------------------
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True,
        description="Allow credentials in CORS requests"
    )

    # --------------------------------------------------------------------------
    # LOGGING CONFIGURATION
    # --------------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # --------------------------------------------------------------------------
    # COMPUTED PROPERTIES
    # --------------------------------------------------------------------------
    @computed_field
    @property
    def database_type(self) -> DatabaseType:
        """
        Engine implied by the configuration.

        Returns:
            POSTGRESQL when DATABASE_URL is set, SQLITE otherwise
        """
        if self.DATABASE_URL:
            return DatabaseType.POSTGRESQL
        return DatabaseType.SQLITE

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def blank_url_is_unset(cls, v):
        """Treat an empty DATABASE_URL as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Warn when the default SECRET_KEY is in use."""
        if v == "your-super-secret-key-change-in-production":
            import warnings
            warnings.warn(
                "Using default SECRET_KEY. Generate a secure key for production!",
                UserWarning
            )
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [origin.strip() for origin in v.split(",")]
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


# Module-level settings instance for convenient imports
settings = get_settings()
