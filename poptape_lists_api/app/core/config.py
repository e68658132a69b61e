"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for everything except the identity
service URL, which must be supplied by the deployment.  A missing
``AUTHYURL`` is not detected here; the authentication dependency reports
it per request as a server misconfiguration.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Poptape Lists API")
    api_version: str = os.getenv("VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    # "text" or "json"; the file handler rotates at LOG_MAX_BYTES.
    log_format: str = os.getenv("LOG_FORMAT", "text")
    log_max_bytes: int = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))
    log_backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "5"))

    # Endpoint of the identity service.  Every authenticated request
    # forwards its X-Access-Token header here and expects a JSON body
    # carrying the caller's ``public_id``.
    authy_url: str = os.getenv("AUTHYURL", "")

    # Transport timeout in seconds for the identity call.  There is no
    # retry; a timeout is reported as the service being unavailable.
    authy_timeout: float = float(os.getenv("AUTHY_TIMEOUT", "5"))

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "poptape_lists.db")

    # Comma-separated list of allowed CORS origins ("*" for any).
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Pagination bounds applied when listing the items of a list.
    default_page_limit: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "50"))
    max_page_limit: int = int(os.getenv("MAX_PAGE_LIMIT", "100"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
