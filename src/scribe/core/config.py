from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Scribe"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    log_usernames: bool = True

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcard origins since credentials are allowed."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_pat: str | None = None  # Fallback credential when the user has no OAuth token
    github_user_agent: str = "Scribe-Changelog-Generator"
    github_request_timeout_seconds: float | None = None  # None = wait indefinitely

    # Gemini
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-1.5-flash"
    generation_timeout_seconds: float = 15.0

    # Changelog generation
    default_lookback_days: int = 30  # Window used when a project has nothing published yet
    generate_rate_limit: str = "10/minute"
    signin_rate_limit: str = "20/minute"


@lru_cache
def get_settings() -> Settings:
    return Settings()
