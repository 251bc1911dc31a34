"""Logging configuration."""

import logging
import sys
from typing import Optional

from cryptowallet.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Per-request chatter from HTTP clients and the ORM
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn": logging.INFO,
}


def resolve_level(name: str) -> int:
    """Map a level name from settings onto a logging level; unknown names mean INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application logging to stdout.

    `level` overrides settings.log_level. Price fallbacks and skipped ledger
    records are logged at WARNING by the services.
    """
    logging.basicConfig(
        level=resolve_level(level or get_settings().log_level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
