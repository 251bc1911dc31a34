"""Core utilities and shared functionality."""

from cryptowallet.core.timezone import (
    now_utc,
    to_utc,
    parse_datetime_utc,
    UTC,
)
from cryptowallet.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientQuantityError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "parse_datetime_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientQuantityError",
]
