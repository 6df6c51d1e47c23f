"""Clock helpers anchored to the portal's configured timezone.

Timestamps are stored naive in ``DateTime()`` columns, expressed as wall-clock
time in the app timezone. Domain code only handles aware datetimes and
converts at the repository boundary with :func:`ensure_app_naive_datetime`
and :func:`ensure_app_timezone`.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from campus_notify.config import get_settings

FALLBACK_TIMEZONE: Final[str] = "Asia/Kolkata"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)([+-])(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone named by ``APP_TIMEZONE``.

    Fixed offsets like ``UTC+05:30`` are accepted; unknown names fall back to
    ``Asia/Kolkata``.
    """

    name = get_settings().app_timezone.strip() or FALLBACK_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass

    match = _UTC_OFFSET.match(name)
    if match is None:
        return ZoneInfo(FALLBACK_TIMEZONE)
    sign, hours, minutes = match.groups()
    offset = timedelta(hours=int(hours), minutes=int(minutes or 0))
    return timezone(-offset if sign == "-" else offset)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def today_in_app_timezone() -> date:
    """Return the calendar date students currently see on campus."""

    return now_in_app_timezone().date()


def start_of_app_day(day: date) -> datetime:
    """Return local midnight at the beginning of ``day``."""

    return datetime.combine(day, time.min, tzinfo=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach the app timezone to naive values and convert aware ones into it."""

    if value is None:
        return None
    tz = get_app_timezone()
    return value.replace(tzinfo=tz) if value.tzinfo is None else value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return the wall-clock time of ``value`` in the app timezone without ``tzinfo``."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def now_in_app_naive_datetime() -> datetime:
    """Column default for creation timestamps."""

    return now_in_app_timezone().replace(tzinfo=None)
