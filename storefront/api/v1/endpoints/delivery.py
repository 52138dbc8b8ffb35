"""Delivery settings, blackout calendar and next-delivery estimate."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from storefront.auth import require_admin
from storefront.db.session import get_db
from storefront.i18n import resolve_language
from storefront.models import DeliverySetting, NonDeliveryDay
from storefront.schemas.delivery import (
    DeliveryEstimateResponse,
    DeliverySettingsResponse,
    DeliverySettingsUpdate,
    NonDeliveryDayCreate,
    NonDeliveryDayResponse,
)
from storefront.services.delivery_calendar import delivery_message, format_delivery_date
from storefront.services.order_service import quote_delivery_date
from storefront.services.settings_service import (
    create_non_delivery_day,
    get_delivery_settings,
    list_non_delivery_days,
    save_delivery_settings,
)
from storefront.utils.time import now_local

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/settings", response_model=DeliverySettingsResponse)
def read_settings(db: Session = Depends(get_db)) -> DeliverySetting:
    return get_delivery_settings(db)


@router.put("/settings", response_model=DeliverySettingsResponse, dependencies=[Depends(require_admin)])
def update_settings(payload: DeliverySettingsUpdate, db: Session = Depends(get_db)) -> DeliverySetting:
    row = save_delivery_settings(db, **payload.model_dump(exclude_unset=True, exclude_none=True))
    logger.info(
        "[SETTINGS] Delivery settings updated: cutoff=%02d:%02d processing_days=%s",
        row.cutoff_hour,
        row.cutoff_minute,
        row.processing_days,
    )
    return row


@router.get("/non-delivery-days", response_model=list[NonDeliveryDayResponse])
def read_non_delivery_days(db: Session = Depends(get_db)) -> list[NonDeliveryDay]:
    return list_non_delivery_days(db)


@router.post(
    "/non-delivery-days",
    response_model=NonDeliveryDayResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def add_non_delivery_day(payload: NonDeliveryDayCreate, db: Session = Depends(get_db)) -> NonDeliveryDay:
    return create_non_delivery_day(
        db,
        day=payload.date,
        reason=payload.reason,
        is_recurring_yearly=payload.is_recurring_yearly,
    )


@router.delete(
    "/non-delivery-days/{day_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def remove_non_delivery_day(day_id: int, db: Session = Depends(get_db)) -> None:
    row = db.get(NonDeliveryDay, day_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Non-delivery day not found")
    db.delete(row)
    db.commit()


@router.get("/estimate", response_model=DeliveryEstimateResponse)
def estimate(request: Request, lang: str | None = None, db: Session = Depends(get_db)) -> DeliveryEstimateResponse:
    """Delivery date an order placed right now would get."""
    language = resolve_language(request, lang)
    delivery_date = quote_delivery_date(db, now_local())
    return DeliveryEstimateResponse(
        delivery_date=delivery_date,
        formatted=format_delivery_date(delivery_date, language),
        message=delivery_message(language),
        language=language,
    )
