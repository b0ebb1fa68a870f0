from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PORT: port the HTTP server listens on (default: 3000)
    - HOST: interface the HTTP server binds to (default: 0.0.0.0)
    - APP_ENV: 'development' (default) or 'production'
    - LOG_LEVEL: root log level (default: INFO)
    - API_PREFIX: base path for the todo endpoints (default: /api)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - SEED_DATA: 'true' to insert sample todos at startup (default: true outside production)
    - STATIC_DIR: directory of static files served at '/', if it exists (default: ./public)
    """

    port: int
    host: str
    app_env: str
    log_level: str
    api_prefix: str
    cors_allow_origins: List[str]
    seed_data: bool
    static_dir: Optional[str]

    def is_development(self) -> bool:
        return self.app_env == "development"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_port(value: str, default: int = 3000) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _normalize_prefix(prefix: str) -> str:
    p = "/" + prefix.strip().strip("/")
    return "" if p == "/" else p


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    app_env = _get_env("APP_ENV", "development").strip().lower()
    if app_env not in {"development", "production"}:
        app_env = "development"

    seed_default = app_env != "production"
    seed_data = _parse_bool(_get_env("SEED_DATA", "true" if seed_default else "false"), seed_default)

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level = "INFO"

    static_dir = _get_env("STATIC_DIR", "public").strip() or None

    return Settings(
        port=_parse_port(_get_env("PORT", "3000")),
        host=_get_env("HOST", "0.0.0.0").strip(),
        app_env=app_env,
        log_level=log_level,
        api_prefix=_normalize_prefix(_get_env("API_PREFIX", "/api")),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        seed_data=seed_data,
        static_dir=static_dir,
    )
