"""Per-category log levels for the admin data layer.

The SQL engine and the HTTP client are chatty at INFO; repositories and
the session context are the categories an operator usually wants to turn
up. Each category has its own ``log_level_*`` setting.
"""

import logging
import sys

from travel_admin.config import Settings, get_settings


_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field -> loggers it controls
CATEGORY_LOGGERS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_repository": (
        "travel_admin.repositories",
        "travel_admin.application.repositories",
        "travel_admin.infrastructure.database",
    ),
    "log_level_auth": (
        "travel_admin.session",
        "travel_admin.application.services",
        "travel_admin.infrastructure.auth",
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the configured levels and return them keyed by logger name.

    Safe to call more than once; a stderr handler is only attached when
    the root logger has none.
    """
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for field_name, logger_names in CATEGORY_LOGGERS.items():
        level = parse_level(getattr(settings, field_name, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s http=%s repository=%s auth=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_http,
        settings.log_level_repository,
        settings.log_level_auth,
    )
    return applied


def parse_level(raw: str | int) -> int:
    """Level name or number to a logging constant; unknown names mean INFO."""
    if isinstance(raw, int):
        return raw
    numeric = logging.getLevelName(raw.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO
