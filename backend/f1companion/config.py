"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Signing material (SUPABASE_JWT_SECRET, INVITE_TOKEN_KEY) has no default:
      the API refuses to start without it
    - get_settings() / get_runtime_settings() are cached (lru_cache), one instance per process
    - environment defaults to "production", so schema creation on startup is opt-in

Design Decisions:
    - RuntimeSettings holds what scripts need (database, logging); migrations and
      the catalog seed run without the API's secrets
    - Defaults provided for all non-secret settings so docker-compose works out of the box
    - cors_origin_regex admits Netlify preview deployments alongside the explicit list
"""

from functools import lru_cache

from cryptography.fernet import Fernet
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeSettings(BaseSettings):
    """Database, runtime and logging settings shared by the API and scripts."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database
    database_url: str = (
        "postgresql+asyncpg://f1:f1@db:5432/f1companion"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Runtime
    environment: str = "production"
    create_schema_on_startup: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


class Settings(RuntimeSettings):
    """Full API settings: runtime plus auth, invites and CORS."""

    # Auth (Supabase-issued HS256 tokens)
    supabase_jwt_secret: str = Field(min_length=32)
    jwt_audience: str = "authenticated"

    # League invites: urlsafe base64 32-byte Fernet key
    invite_token_key: str

    @field_validator("invite_token_key")
    @classmethod
    def check_fernet_key(cls, v: str) -> str:
        try:
            Fernet(v)
        except ValueError as e:
            raise ValueError("invite_token_key must be a urlsafe base64 32-byte key") from e
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    cors_origin_regex: str | None = r"https://.*\.netlify\.app"


@lru_cache
def get_runtime_settings() -> RuntimeSettings:
    return RuntimeSettings()


@lru_cache
def get_settings() -> Settings:
    return Settings()
