from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Article CMS API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./cms.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Listing
    articles_per_page: int = 6

    # Article images
    upload_dir: str = "uploads"
    max_upload_size_mb: int = 2

    # Admin account seeded on first startup (only when the users table is empty)
    admin_username: str = ""
    admin_password: str = ""

    # Contact form delivery (SMTP)
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_starttls: bool = True
    smtp_ssl_tls: bool = False
    mail_from: str = "sender@example.com"
    contact_recipient: str = "recipient@example.com"

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL statements
    log_level_store: str = "INFO"            # article/category/user repositories
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_mail: str = "INFO"             # fastapi-mail / contact delivery

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
