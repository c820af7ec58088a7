from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"
DEFAULT_TOKEN_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NOTEVAULT_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8080",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    # Peers whose X-Forwarded-For is honored; others are keyed by their own address
    forwarded_allow_ips: list[str] = ["127.0.0.1"]
    root_path: str = ""

    # Tokens
    token_secret: str = DEFAULT_TOKEN_SECRET
    token_ttl_seconds: int = 24 * 60 * 60

    # Authentication security settings
    min_password_length: int = 8
    max_login_attempts: int = 5  # Maximum failed login attempts before rate limiting
    login_attempt_window: int = 300  # Time window for login attempts (5 minutes)
    enable_rate_limiting: bool = True  # Enable rate limiting for auth endpoints

    @model_validator(mode="after")
    def validate_production_settings(self) -> Settings:
        """Refuse to run outside development with the default token secret."""
        if self.environment != "development" and self.token_secret == DEFAULT_TOKEN_SECRET:
            raise ValueError(
                "NOTEVAULT_TOKEN_SECRET must be set to a secure value in "
                "non-development environments. Generate one with: "
                'python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        return self


settings = Settings()
