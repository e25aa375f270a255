"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Roster Groups API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Record store
    store_backend: Literal["sqlalchemy", "supabase"] = Field(
        default="sqlalchemy",
        description="Which record store backs the repositories",
    )
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/roster",
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # Supabase
    supabase_url: str = Field(
        default="",
        description="Supabase project URL (e.g. https://xyzabc.supabase.co)",
    )
    supabase_service_role_key: str = Field(
        default="",
        description="Supabase service role key (server-side only, keep secret)",
    )

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key for HS256 tokens (local development and tests)",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=30)

    # Group creation
    # groups.join_code is a 16 character column
    join_code_length: int = Field(default=6, ge=1, le=16)
    join_code_max_attempts: int = Field(
        default=10,
        ge=1,
        description="Collisions tolerated before join code generation gives up",
    )
    creator_role: str = Field(default="teacher")
    redirect_path_template: str = Field(default="/attendance/{group_id}")
    redirect_delay_seconds: float = Field(default=2.0, ge=0)

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )
    group_create_rate_limit: str = Field(default="10/minute")
    group_lookup_rate_limit: str = Field(default="30/minute")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:8081,http://localhost:19006",
        description="Comma-separated list of allowed origins",
    )

    @model_validator(mode="after")
    def check_supabase_backend(self) -> "Settings":
        """Reject a Supabase store that could not see any rows.

        The shared client carries no user session, so row-level security
        only lets it through with the service role key.
        """
        if self.store_backend == "supabase":
            missing = [
                name
                for name in ("supabase_url", "supabase_service_role_key")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(
                    f"store_backend 'supabase' requires {', '.join(missing).upper()}"
                )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def supabase_jwks_url(self) -> str:
        """JWKS endpoint for ES256 token verification."""
        if self.supabase_url:
            return f"{self.supabase_url.rstrip('/')}/auth/v1/.well-known/jwks.json"
        return ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosting providers hand out plain ``postgresql://`` URLs, while
        SQLAlchemy's async engine needs ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

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

    def redirect_path_for(self, group_id: object) -> str:
        """Path the client navigates to once a group has been created."""
        return self.redirect_path_template.format(group_id=group_id)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
