"""Utility helpers for reusable functionality."""

from .datetime import (
    from_utc_naive_datetime,
    get_app_timezone,
    now_in_utc_naive_datetime,
    to_utc_naive_datetime,
)

__all__ = [
    "from_utc_naive_datetime",
    "get_app_timezone",
    "now_in_utc_naive_datetime",
    "to_utc_naive_datetime",
]
