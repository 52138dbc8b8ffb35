"""Delivery date scheduling: order cutoff, processing days and blackout calendar.

The calculator is a pure function of (settings, blackout days, now). Callers
pass either ORM rows or plain value objects; only the attributes named in the
protocols below are read.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Protocol, Sequence

SUPPORTED_LANGUAGES: tuple[str, ...] = ("mn", "ko", "ru", "en")
FALLBACK_LANGUAGE: str = "mn"

# Sunday-first, matching the storefront's calendar widgets.
WEEKDAY_NAMES: dict[str, tuple[str, ...]] = {
    "mn": ("Ням", "Даваа", "Мягмар", "Лхагва", "Пүрэв", "Баасан", "Бямба"),
    "ko": ("일", "월", "화", "수", "목", "금", "토"),
    "ru": ("Вс", "Пн", "Вт", "Ср", "Чт", "Пт", "Сб"),
    "en": ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
}

DELIVERY_MESSAGES: dict[str, str] = {
    "mn": "хүргэгдэнэ",
    "ko": "배송",
    "ru": "доставка",
    "en": "delivery",
}


class DeliveryRules(Protocol):
    cutoff_hour: int
    cutoff_minute: int
    processing_days: int


class BlackoutDay(Protocol):
    date: date
    is_recurring_yearly: bool


@dataclass(frozen=True)
class DeliverySettings:
    """Plain value form of the delivery settings row."""

    cutoff_hour: int
    cutoff_minute: int
    processing_days: int


@dataclass(frozen=True)
class CalendarDay:
    """Plain value form of a non-delivery day."""

    date: date
    is_recurring_yearly: bool = False
    reason: str = ""


def is_non_delivery_day(candidate: date, non_delivery_days: Iterable[BlackoutDay]) -> bool:
    """Return True when ``candidate`` is blocked by any blackout entry.

    Recurring entries match on month and day in every year; one-off entries
    match only their exact date.
    """
    for day in non_delivery_days:
        blocked = _as_date(day.date)
        if day.is_recurring_yearly:
            if blocked.month == candidate.month and blocked.day == candidate.day:
                return True
        elif blocked == candidate:
            return True
    return False


def calculate_delivery_date(
    settings: DeliveryRules,
    non_delivery_days: Sequence[BlackoutDay],
    now: datetime,
) -> date:
    """Return the first deliverable date for an order placed at ``now``.

    Orders placed strictly before the daily cutoff ship after
    ``processing_days``; orders at or after the cutoff lose one more day. The
    result is then pushed forward past blackout days. Settings are not
    validated here.
    """
    cutoff = now.replace(
        hour=settings.cutoff_hour,
        minute=settings.cutoff_minute,
        second=0,
        microsecond=0,
    )

    days_ahead = settings.processing_days
    if now >= cutoff:
        days_ahead += 1

    delivery_date = now.date() + timedelta(days=days_ahead)
    while is_non_delivery_day(delivery_date, non_delivery_days):
        delivery_date += timedelta(days=1)
    return delivery_date


def normalize_language(language: str | None) -> str:
    """Map any input to one of the supported language codes."""
    code = (language or "").strip().lower()
    return code if code in SUPPORTED_LANGUAGES else FALLBACK_LANGUAGE


def format_delivery_date(value: date, language: str = FALLBACK_LANGUAGE) -> str:
    """Render month/day with a localized weekday abbreviation."""
    weekday_index = (value.weekday() + 1) % 7
    weekdays = WEEKDAY_NAMES.get(language, WEEKDAY_NAMES[FALLBACK_LANGUAGE])
    day_of_week = weekdays[weekday_index]

    if language == "ko":
        return f"{value.month}월/{value.day}({day_of_week})"
    if language == "en":
        return f"{value.month}/{value.day}({day_of_week})"
    if language == "ru":
        return f"{value.day}.{value.month}({day_of_week})"
    return f"{value.month} сар/{value.day}({day_of_week})"


def delivery_message(language: str = FALLBACK_LANGUAGE) -> str:
    return DELIVERY_MESSAGES.get(language, DELIVERY_MESSAGES[FALLBACK_LANGUAGE])


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
