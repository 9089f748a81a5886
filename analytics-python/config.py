"""
Service Configuration
Reads settings from environment variables (and a local .env file)
"""

import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _database_url() -> str:
    """Use DATABASE_URL when set, otherwise build a PostgreSQL URL from DB_* parts"""
    url = os.getenv('DATABASE_URL')
    if url:
        return url
    return (
        f"postgresql://{os.getenv('DB_USER', 'postgres')}:{os.getenv('DB_PASSWORD', '')}"
        f"@{os.getenv('DB_HOST', 'localhost')}:{os.getenv('DB_PORT', '5432')}"
        f"/{os.getenv('DB_NAME', 'workout_tracker')}"
    )


def _cors_origins() -> List[str]:
    raw = os.getenv('CORS_ORIGINS')
    if not raw:
        return [
            "http://localhost:3000",   # Node.js API
            "http://localhost:8080",   # Frontend dev server
            "http://127.0.0.1:5500",   # VS Code Live Server
            "null"                      # Local file:// access
        ]
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = field(default_factory=_database_url)
    log_level: str = field(default_factory=lambda: os.getenv('LOG_LEVEL', 'INFO').upper())
    cache_enabled: bool = field(default_factory=lambda: _env_bool('ANALYTICS_CACHE_ENABLED', True))
    cache_size: int = field(default_factory=lambda: int(os.getenv('ANALYTICS_CACHE_SIZE', 256)))
    cors_origins: List[str] = field(default_factory=_cors_origins)
    port: int = field(default_factory=lambda: int(os.getenv('PORT', 8000)))


settings = Settings()
