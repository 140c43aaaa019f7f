"""Timezone helpers shared by the persistence and domain layers."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from juscrm.config import get_settings

_FALLBACK_TIMEZONE: Final[str] = "America/Sao_Paulo"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``.

    Accepts IANA names (``America/Sao_Paulo``) and fixed offsets
    (``UTC-03:00``). Unknown values resolve to ``America/Sao_Paulo``.
    """

    name = (get_settings().app_timezone or "").strip() or _FALLBACK_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _UTC_OFFSET.match(name)
        if match is None:
            return ZoneInfo(_FALLBACK_TIMEZONE)
    sign = -1 if match.group("sign") == "-" else 1
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(sign * offset)


def now_in_app_timezone() -> datetime:
    """Return the current aware time in the application timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current application time without ``tzinfo`` for DB defaults."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the application timezone.

    Naive values are assumed to already be expressed in the application
    timezone, which is how they are written to the database.
    """

    if value is None:
        return None
    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` in the application timezone with ``tzinfo`` stripped."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def has_expired(deadline: datetime | None, *, now: datetime | None = None) -> bool:
    """Return ``True`` when ``deadline`` is missing or already in the past."""

    if deadline is None:
        return True
    current = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    return ensure_app_timezone(deadline) <= current
