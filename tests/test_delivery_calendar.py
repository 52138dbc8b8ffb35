from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from storefront.services.delivery_calendar import (
    CalendarDay,
    DeliverySettings,
    calculate_delivery_date,
    delivery_message,
    format_delivery_date,
    is_non_delivery_day,
    normalize_language,
)

UB = ZoneInfo("Asia/Ulaanbaatar")
RULES = DeliverySettings(cutoff_hour=14, cutoff_minute=0, processing_days=2)


def test_order_before_cutoff_ships_after_processing_days() -> None:
    now = datetime(2026, 3, 10, 13, 0, tzinfo=UB)
    assert calculate_delivery_date(RULES, [], now) == date(2026, 3, 12)


def test_order_after_cutoff_loses_one_more_day() -> None:
    now = datetime(2026, 3, 10, 15, 0, tzinfo=UB)
    assert calculate_delivery_date(RULES, [], now) == date(2026, 3, 13)


def test_order_exactly_at_cutoff_counts_as_late() -> None:
    now = datetime(2026, 3, 10, 14, 0, 0, tzinfo=UB)
    assert calculate_delivery_date(RULES, [], now) == date(2026, 3, 13)


def test_seconds_before_cutoff_minute_are_still_on_time() -> None:
    rules = DeliverySettings(cutoff_hour=18, cutoff_minute=30, processing_days=1)
    now = datetime(2026, 3, 10, 18, 29, 59, tzinfo=UB)
    assert calculate_delivery_date(rules, [], now) == date(2026, 3, 11)


def test_recurring_blackout_pushes_delivery_in_any_year() -> None:
    new_year = CalendarDay(date=date(2020, 1, 1), is_recurring_yearly=True, reason="New Year")
    now = datetime(2025, 12, 30, 9, 0, tzinfo=UB)
    assert calculate_delivery_date(RULES, [new_year], now) == date(2026, 1, 2)


def test_consecutive_blackouts_are_all_skipped() -> None:
    days = [
        CalendarDay(date=date(2026, 7, 11), is_recurring_yearly=True, reason="Naadam"),
        CalendarDay(date=date(2026, 7, 12), is_recurring_yearly=True, reason="Naadam"),
        CalendarDay(date=date(2026, 7, 13), reason="Naadam extra"),
    ]
    now = datetime(2026, 7, 9, 10, 0, tzinfo=UB)
    assert calculate_delivery_date(RULES, days, now) == date(2026, 7, 14)


def test_one_off_blackout_only_blocks_its_own_year() -> None:
    closed = CalendarDay(date=date(2025, 3, 12), reason="Stocktake")
    assert is_non_delivery_day(date(2025, 3, 12), [closed]) is True
    assert is_non_delivery_day(date(2026, 3, 12), [closed]) is False

    now = datetime(2026, 3, 10, 13, 0, tzinfo=UB)
    assert calculate_delivery_date(RULES, [closed], now) == date(2026, 3, 12)


def test_zero_processing_days_before_cutoff_is_same_day() -> None:
    rules = DeliverySettings(cutoff_hour=10, cutoff_minute=0, processing_days=0)
    now = datetime(2026, 3, 10, 9, 0, tzinfo=UB)
    assert calculate_delivery_date(rules, [], now) == date(2026, 3, 10)


@pytest.mark.parametrize(
    ("language", "expected"),
    [
        ("ko", "3월/12(목)"),
        ("en", "3/12(Thu)"),
        ("ru", "12.3(Чт)"),
        ("mn", "3 сар/12(Пүрэв)"),
        ("de", "3 сар/12(Пүрэв)"),
    ],
)
def test_format_delivery_date_per_language(language: str, expected: str) -> None:
    assert format_delivery_date(date(2026, 3, 12), language) == expected


def test_sunday_uses_first_weekday_entry() -> None:
    assert format_delivery_date(date(2026, 3, 15), "en") == "3/15(Sun)"


def test_language_helpers_fall_back_to_mongolian() -> None:
    assert normalize_language(" KO ") == "ko"
    assert normalize_language("fr") == "mn"
    assert normalize_language(None) == "mn"
    assert delivery_message("ru") == "доставка"
    assert delivery_message("xx") == "хүргэгдэнэ"
