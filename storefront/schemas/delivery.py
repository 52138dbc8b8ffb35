"""Delivery settings and calendar schemas."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class DeliverySettingsResponse(BaseModel):
    cutoff_hour: int
    cutoff_minute: int
    processing_days: int
    updated_at: dt.datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class DeliverySettingsUpdate(BaseModel):
    cutoff_hour: int | None = Field(default=None, ge=0, le=23)
    cutoff_minute: int | None = Field(default=None, ge=0, le=59)
    processing_days: int | None = Field(default=None, ge=0, le=30)


class NonDeliveryDayCreate(BaseModel):
    date: dt.date
    reason: str = Field(default="", max_length=255)
    is_recurring_yearly: bool = False


class NonDeliveryDayResponse(NonDeliveryDayCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class DeliveryEstimateResponse(BaseModel):
    """Next delivery date plus its localized rendering."""

    delivery_date: dt.date
    formatted: str
    message: str
    language: str
