"""Helpers for working with timezone-aware datetimes.

Timestamps are stored as naive UTC values and localized to the configured
application timezone when read back.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from notification_service.config import get_settings


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    Resolved from ``APP_TIMEZONE``; unknown names fall back to UTC.
    """

    tz_name = (get_settings().app_timezone or "").strip()
    if not tz_name or tz_name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        return timezone.utc


def now_in_utc_naive_datetime() -> datetime:
    """Return the current UTC time without attaching ``tzinfo``."""

    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def to_utc_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` as naive UTC, ready to be stored.

    Naive inputs are read as wall-clock time in the application timezone.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=get_app_timezone())
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive_datetime(value: datetime | None) -> datetime | None:
    """Localize a stored naive UTC ``value`` to the application timezone."""

    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).astimezone(get_app_timezone())
