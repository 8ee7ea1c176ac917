"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match current behavior

Collaborators:
  - api/main.py: reads settings for CORS and startup validation
  - identity/auth.py: session token secret, cookie name and TTL
  - interfaces/api/http/dependencies.py: page size and upload limits
  - client/api.py, client/query.py: base URL, retries and polling interval

Constraints:
  - No business logic, pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: True)
        api_prefix: Path prefix for the REST API (default: /api)
        session_secret: Secret shared with the auth provider to sign sessions
        session_cookie_name: Cookie carrying the session token
        session_ttl_minutes: Session token TTL in minutes
        default_page_size: Page size when the caller omits ?size
        max_page_size: Upper bound for ?size
        max_upload_bytes: Maximum attachment size in bytes (default: 10MB)
        dev_seed_demo: Seed demo users/projects on startup
        api_base_url: Base URL the dashboard client talks to
        request_timeout_seconds: Client HTTP timeout
        query_retry_attempts: Retries for failed queries (mutations never retry)
        unread_count_refresh_seconds: Polling interval for the unread badge
    """

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = True

    # REST API
    api_prefix: str = "/api"
    default_page_size: int = 10
    max_page_size: int = 100
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB

    # Security - session tokens minted by the auth provider
    session_secret: str = "dev-secret"
    session_cookie_name: str = "promsys.session_token"
    session_ttl_minutes: int = 60 * 24 * 7
    session_cookie_secure: bool = False

    # Dev tools
    dev_seed_demo: bool = False

    # Dashboard client
    api_base_url: str = "http://localhost:8000"
    request_timeout_seconds: float = 15.0
    query_retry_attempts: int = 3
    unread_count_refresh_seconds: float = 30.0

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def page_size_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("page sizes must be greater than 0")
        return v

    @field_validator("query_retry_attempts")
    @classmethod
    def retries_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("query_retry_attempts must be >= 0")
        return v

    @field_validator("api_prefix")
    @classmethod
    def api_prefix_normalized(cls, v: str) -> str:
        value = "/" + (v or "").strip().strip("/")
        return "" if value == "/" else value

    def validate_page_params(self) -> None:
        """
        Cross-field validation: default page size must fit the maximum.
        Called explicitly after instantiation.
        """
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) must not exceed "
                f"max_page_size ({self.max_page_size})"
            )

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        secret = (self.session_secret or "").strip()
        if not secret or secret in insecure_secrets:
            raise ValueError(
                "SESSION_SECRET must be set to a strong, non-default value in production"
            )
        if len(secret) < 32:
            raise ValueError("SESSION_SECRET must be at least 32 characters in production")
        if not self.session_cookie_secure:
            raise ValueError("SESSION_COOKIE_SECURE must be true in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    settings = Settings()
    settings.validate_page_params()
    return settings
