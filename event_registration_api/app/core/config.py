"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for every field except
the administrator password, which must be supplied explicitly before
the admin login endpoint can be used.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Event Registration API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Key used to sign admin session tokens.
    secret_key: str = os.getenv("SECRET_KEY", "change_me")

    # Shared administrator password.  When empty, POST /admin/session
    # answers 500 "Admin password not configured".
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")
    session_expire_hours: int = int(os.getenv("SESSION_EXPIRE_HOURS", "24"))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "admin_session")
    # Only send the session cookie over HTTPS.  Enable in production.
    cookie_secure: bool = _env_flag("COOKIE_SECURE")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "event_registration.db")


# Environment variables must be set before this module is imported.
settings = Settings()
