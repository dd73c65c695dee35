"""Unit tests for per-category log levels."""

import logging

from travel_admin.config import Settings
from travel_admin.infrastructure.logging.log_config import parse_level, setup_logging


def test_category_levels_follow_settings():
    settings = Settings(
        log_level="INFO",
        log_level_sql="ERROR",
        log_level_http="warning",
        log_level_repository="DEBUG",
        _env_file=None,
    )

    applied = setup_logging(settings)

    assert applied["sqlalchemy.engine"] == logging.ERROR
    assert applied["httpx"] == logging.WARNING
    assert logging.getLogger("travel_admin.application.repositories").level == logging.DEBUG
    assert logging.getLogger().handlers


def test_parse_level_defaults_to_info():
    assert parse_level("verbose") == logging.INFO
    assert parse_level(" debug ") == logging.DEBUG
    assert parse_level(logging.ERROR) == logging.ERROR
