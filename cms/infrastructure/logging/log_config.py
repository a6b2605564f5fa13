"""Logging setup for the CMS.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides levels and the console handler. Levels come from Settings, one field
per category, so SQL echo or SMTP chatter can be turned up while debugging
without touching the rest of the app.
"""

import logging
import sys

from cms.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field → loggers it controls
CATEGORY_LOGGERS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"),
    "log_level_store": ("cms.infrastructure.database.repositories",),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_mail": (
        "fastapi_mail",
        "cms.infrastructure.mail",
        "cms.application.services.contact_service",
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply root and per-category levels; returns logger name → level set.

    Safe to call more than once: the stderr handler is only added when the
    root logger has none (uvicorn and pytest install their own).
    """
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for field_name, logger_names in CATEGORY_LOGGERS.items():
        level = _parse_level(getattr(settings, field_name))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        ", ".join(f"{field}={getattr(settings, field)}" for field in CATEGORY_LOGGERS),
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    numeric = logging.getLevelName(raw.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO
