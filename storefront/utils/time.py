"""Clock helpers for the shop's local time zone."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from storefront.core.config import settings


def shop_timezone() -> ZoneInfo:
    return ZoneInfo(settings.app_timezone)


def now_local() -> datetime:
    """Return the current wall-clock time in the shop's time zone.

    Delivery cutoffs are configured as local hours, so the delivery calculator
    must be fed local time rather than UTC.
    """
    return datetime.now(shop_timezone())


def day_window_utc(start: date | None, end: date | None) -> tuple[datetime | None, datetime | None]:
    """Return UTC boundaries covering local calendar days ``start``..``end`` inclusive."""
    tz = shop_timezone()
    start_at = None
    end_at = None
    if start is not None:
        start_at = datetime.combine(start, time.min, tzinfo=tz).astimezone(timezone.utc)
    if end is not None:
        end_at = datetime.combine(end + timedelta(days=1), time.min, tzinfo=tz).astimezone(timezone.utc)
    return start_at, end_at
