"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env (never hardcoded beyond dev defaults)
    - get_settings() is cached (lru_cache), one instance per process
    - Core modules never read Settings; they receive resolved values through AppContext

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - SQLite by default: a single-operator content site runs without a database server
"""

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./data.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_auto_create: bool = True

    # Access gate
    admin_pass: str = "changeme"

    # Uploads
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    upload_max_bytes: int = 10 * 1024 * 1024

    # Contact email (SMTP)
    email_host: str = "smtp.sendgrid.net"
    email_port: int = 587
    email_user: str = "apikey"
    email_pass: str = ""
    sendgrid_api_key: str = ""
    email_sender: str = "noreply@example.com"
    # CONTACT_RECEIVER wins; older deployments only set EMAIL_RECEIVER
    contact_receiver: str = Field(
        "you@example.com",
        validation_alias=AliasChoices("contact_receiver", "email_receiver"),
    )
    email_starttls: bool = True
    email_timeout_seconds: float = 30.0

    @model_validator(mode="after")
    def fallback_email_password(self) -> "Settings":
        """SendGrid deployments only set SENDGRID_API_KEY."""
        if not self.email_pass and self.sendgrid_api_key:
            self.email_pass = self.sendgrid_api_key
        return self

    # API
    cors_origins: list[str] = ["*"]
    static_dir: str = "public"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
