"""Unit tests for per-category logging setup."""

import logging

from countdown_timers.config import Settings
from countdown_timers.infrastructure.logging.log_config import setup_logging


def test_category_levels_are_applied():
    settings = Settings(_env_file=None, log_level_sql="ERROR", log_level_timers="DEBUG")

    applied = setup_logging(settings)

    assert applied["sql"] == logging.ERROR
    assert applied["timers"] == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("countdown_timers.application.services").level == logging.DEBUG


def test_unknown_level_name_falls_back_to_info():
    applied = setup_logging(Settings(_env_file=None, log_level_http="CHATTY"))
    assert applied["http"] == logging.INFO
