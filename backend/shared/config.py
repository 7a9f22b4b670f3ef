"""
Centralized configuration for the Stacks backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., JWT_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Stacks API"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    api_prefix: str = "/api"

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Storage
    storage_backend: Literal["supabase", "memory"] = "supabase"

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # direct Postgres URL, used by run_migrations.py

    # JWT
    jwt_secret: str = ""
    jwt_issuer: str = ""
    jwt_audience: str = ""
    token_ttl_seconds: int = 7 * 24 * 3600

    # Passwords
    bcrypt_rounds: str = "10"

    # Admin
    admin_emails: str = ""
    auto_seed_admin: bool = True
    admin_seed_name: str = "Admin"
    admin_seed_password: str = ""

    # Email verification
    verification_ttl_minutes: int = 60
    public_base_url: str = "http://localhost:8000/api"

    # Outbound email
    email_transport: Literal["log", "resend"] = "log"
    email_from: str = "Stacks <no-reply@stacks.local>"
    resend_api_key: str = ""

    @property
    def admin_email_list(self) -> list[str]:
        """Admin allow-list, trimmed and lowercased."""
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
