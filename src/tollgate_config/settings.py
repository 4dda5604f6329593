"""Tollgate configuration.

Values come from, highest priority first:

- the process environment,
- one env file: ``$TOLLGATE_ENV_FILE``, else ``config/.env.dev``, else
  ``config/.env``,
- the defaults below.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Development-only fallback. Anyone who reads this file can forge tokens
# signed with it, so production refuses to start while it is in use.
INSECURE_DEV_JWT_SECRET = "tollgate-dev-secret-do-not-use-in-production"  # NOQA: S105

ENV_FILE_VARIABLE = "TOLLGATE_ENV_FILE"


def _project_root() -> Path:
    """The first ancestor holding ``config/`` or ``.git``, else the checkout root."""
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "config").is_dir() or (parent / ".git").is_dir():
            return parent
    return here.parents[2]


def get_config_dir() -> Path:
    return _project_root() / "config"


def _env_file() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    candidates = []
    if explicit:
        path = Path(explicit)
        candidates.append(path if path.is_absolute() else _project_root() / path)
    candidates += [get_config_dir() / ".env.dev", get_config_dir() / ".env"]
    return next((path for path in candidates if path.is_file()), None)


class Settings(BaseSettings):
    """Runtime configuration for the API, the services and the store.

    Field names map to upper-case environment variables
    (``jwt_secret_key`` reads ``JWT_SECRET_KEY``).
    """

    model_config = SettingsConfigDict(
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Tollgate"
    environment: Literal["development", "test", "production"] = "development"
    log_level: str = "INFO"

    # Credentials and tokens
    jwt_secret_key: SecretStr = SecretStr(INSECURE_DEV_JWT_SECRET)
    jwt_access_token_expire_hours: int = 24
    password_hash_rounds: int = 10

    # Identity store; a full URL wins over the POSTGRES_* parts
    database_url_override: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "tollgate"

    # HTTP
    api_host: str = "0.0.0.0"  # NOQA: S104
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""  # comma-separated; empty disables CORS

    # Session cookie
    session_cookie_name: str = "token"
    session_cookie_max_age_seconds: int = 15 * 60
    api_cookie_secure: bool | None = None  # None: follow environment
    api_cookie_samesite: Literal["lax", "strict", "none"] = "strict"
    api_cookie_domain: str | None = None

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_origins(cls, v: Any) -> str:
        if isinstance(v, (list, tuple)):
            return ",".join(str(origin) for origin in v)
        return v or ""

    @model_validator(mode="after")
    def _require_real_secret_in_production(self) -> Settings:
        if self.is_production and (
            not self.jwt_secret_key.get_secret_value() or self.uses_insecure_jwt_secret
        ):
            msg = (
                "JWT_SECRET_KEY must be set to a private value when "
                "ENVIRONMENT=production"
            )
            raise ValueError(msg)
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uses_insecure_jwt_secret(self) -> bool:
        return self.jwt_secret_key.get_secret_value() == INSECURE_DEV_JWT_SECRET

    @property
    def cookie_secure(self) -> bool:
        """Whether cookies carry the Secure flag (production unless overridden)."""
        if self.api_cookie_secure is None:
            return self.is_production
        return self.api_cookie_secure

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        url = URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password.get_secret_value() or None,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        )
        return url.render_as_string(hide_password=False)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        return [
            origin.strip()
            for origin in self.api_cors_origins.split(",")
            if origin.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return Settings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
