"""
Application settings

Environment-based configuration for the festival CMS backend. Values are read
once and cached; tests call ``get_settings.cache_clear()`` after changing the
environment.
"""

import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional


class Environment(Enum):
    DEVELOPMENT = "development"
    TEST = "test"
    STAGING = "staging"
    PRODUCTION = "production"


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _current_environment() -> Environment:
    env_name = os.getenv("ENVIRONMENT", "development").lower()
    try:
        return Environment(env_name)
    except ValueError:
        return Environment.DEVELOPMENT


@dataclass
class Settings:
    environment: Environment
    app_version: str
    database_url: str
    sql_echo: bool
    cors_origins: List[str]
    auto_migrate: bool
    media_root: Path
    public_base_url: str
    max_upload_bytes: int
    admin_username: str
    admin_password_hash: Optional[str]
    session_ttl_seconds: int
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache()
def get_settings() -> Settings:
    """Build settings from the process environment."""
    backend_dir = Path(__file__).parent.parent
    default_db = f"sqlite+aiosqlite:///{backend_dir / 'festival.db'}"
    return Settings(
        environment=_current_environment(),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        database_url=os.getenv("DATABASE_URL", default_db),
        sql_echo=_env_bool("SQL_ECHO"),
        cors_origins=os.getenv(
            "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
        ).split(","),
        auto_migrate=_env_bool("AUTO_MIGRATE"),
        media_root=Path(os.getenv("MEDIA_ROOT", "media")),
        public_base_url=os.getenv(
            "PUBLIC_BASE_URL", "http://localhost:8000"
        ).rstrip("/"),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", 10 * 1024 * 1024)),
        admin_username=os.getenv("ADMIN_USERNAME", "admin"),
        admin_password_hash=os.getenv("ADMIN_PASSWORD_HASH") or None,
        session_ttl_seconds=int(os.getenv("SESSION_TTL_SECONDS", 8 * 3600)),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8000)),
    )
