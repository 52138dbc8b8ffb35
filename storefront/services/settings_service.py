"""Delivery settings and site settings helpers."""

from __future__ import annotations

import json
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.models.cms import SiteSetting
from storefront.models.delivery import DeliverySetting, NonDeliveryDay

logger = logging.getLogger(__name__)

SHIPPING_FEE_KEY: str = "shipping_fee"
SITE_NAME_KEY: str = "site_name"
HERO_KEY: str = "hero_section"
LOGO_KEY: str = "logo_url"
FOOTER_KEY: str = "footer"

DEFAULT_SITE_NAME: str = "Арвижих махны дэлгүүр"
DEFAULT_HERO: dict[str, str] = {
    "title": "Арвижих махны дэлгүүр",
    "subtitle": "Шинэ шилдэг махны дэлгүүр",
    "image_url": "/uploads/hero-bg.jpg",
}
DEFAULT_FOOTER: dict[str, Any] = {
    "company_name": DEFAULT_SITE_NAME,
    "description": "",
    "address": "",
    "phone": "",
    "email": "",
    "copyright_text": "",
    "social_links": {},
    "quick_links": [],
}


def get_delivery_settings(db: Session) -> DeliverySetting:
    """Return the singleton delivery settings row, creating defaults on first use."""
    row = db.get(DeliverySetting, 1)
    if row is None:
        row = DeliverySetting(
            id=1,
            cutoff_hour=settings.default_cutoff_hour,
            cutoff_minute=settings.default_cutoff_minute,
            processing_days=settings.default_processing_days,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("[SETTINGS] Delivery settings initialised with defaults.")
    return row


def save_delivery_settings(
    db: Session,
    *,
    cutoff_hour: int | None = None,
    cutoff_minute: int | None = None,
    processing_days: int | None = None,
) -> DeliverySetting:
    row = get_delivery_settings(db)
    if cutoff_hour is not None:
        row.cutoff_hour = cutoff_hour
    if cutoff_minute is not None:
        row.cutoff_minute = cutoff_minute
    if processing_days is not None:
        row.processing_days = processing_days
    db.commit()
    db.refresh(row)
    return row


def list_non_delivery_days(db: Session) -> list[NonDeliveryDay]:
    return list(db.scalars(select(NonDeliveryDay).order_by(NonDeliveryDay.date.asc())).all())


def create_non_delivery_day(db: Session, *, day: date, reason: str, is_recurring_yearly: bool = False) -> NonDeliveryDay:
    row = NonDeliveryDay(date=day, reason=reason, is_recurring_yearly=is_recurring_yearly)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_site_setting(db: Session, key: str, *, default: str, description: str | None = None) -> SiteSetting:
    """Return a site setting row, creating it with ``default`` when missing."""
    row = db.get(SiteSetting, key)
    if row is None:
        row = SiteSetting(key=key, value=default, description=description)
        db.add(row)
        db.commit()
        db.refresh(row)
    return row


def set_site_setting(db: Session, key: str, value: str, *, description: str | None = None) -> SiteSetting:
    row = db.get(SiteSetting, key)
    if row is None:
        row = SiteSetting(key=key, value=value, description=description)
        db.add(row)
    else:
        row.value = value
        if description is not None:
            row.description = description
    db.commit()
    db.refresh(row)
    return row


def parse_money(value: str | Decimal | int | float) -> Decimal:
    """Parse a non-negative amount; raise ValueError otherwise."""
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, TypeError) as exc:
        raise ValueError("Amount must be numeric") from exc
    if not amount.is_finite() or amount < 0:
        raise ValueError("Amount must be greater than or equal to 0")
    return amount


def get_shipping_fee(db: Session) -> Decimal:
    row = get_site_setting(
        db,
        SHIPPING_FEE_KEY,
        default=str(settings.default_shipping_fee),
        description="Default shipping fee",
    )
    try:
        return parse_money(row.value)
    except ValueError:
        logger.warning("[SETTINGS] Stored shipping fee %r is invalid; using default.", row.value)
        return settings.default_shipping_fee


def get_json_setting(db: Session, key: str, default: dict[str, Any], description: str) -> dict[str, Any]:
    row = get_site_setting(db, key, default=json.dumps(default, ensure_ascii=False), description=description)
    try:
        value = json.loads(row.value)
    except json.JSONDecodeError:
        logger.warning("[SETTINGS] Stored %s is not valid JSON; using default.", key)
        return dict(default)
    if not isinstance(value, dict):
        return dict(default)
    return {**default, **value}


def set_json_setting(db: Session, key: str, value: dict[str, Any], description: str) -> dict[str, Any]:
    set_site_setting(db, key, json.dumps(value, ensure_ascii=False), description=description)
    return value


def ensure_default_settings(db: Session) -> None:
    """Create the settings rows the storefront reads on every page."""
    get_delivery_settings(db)
    get_shipping_fee(db)
    get_site_setting(db, SITE_NAME_KEY, default=DEFAULT_SITE_NAME, description="Website name")
