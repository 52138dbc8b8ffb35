"""Navigation, content block, site setting and media schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NavigationItemCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    url: str = Field(min_length=1, max_length=512)
    sort_order: int = 0
    parent_id: int | None = None
    is_active: bool = True


class NavigationItemUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    url: str | None = Field(default=None, min_length=1, max_length=512)
    sort_order: int | None = None
    parent_id: int | None = None
    is_active: bool | None = None


class NavigationItemResponse(NavigationItemCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class NavigationNode(NavigationItemResponse):
    children: list[NavigationNode] = []


class SiteContentCreate(BaseModel):
    key: str = Field(min_length=1, max_length=100)
    title: str = Field(min_length=1, max_length=255)
    content: str
    image_url: str | None = None
    active: bool = True


class SiteContentUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = None
    image_url: str | None = None
    active: bool | None = None


class SiteContentResponse(SiteContentCreate):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShippingFeePayload(BaseModel):
    shipping_fee: Decimal = Field(ge=0)


class SiteNamePayload(BaseModel):
    site_name: str = Field(min_length=1, max_length=255)


class LogoPayload(BaseModel):
    logo_url: str = Field(max_length=512)


class HeroPayload(BaseModel):
    title: str
    subtitle: str = ""
    image_url: str = ""


class FooterPayload(BaseModel):
    company_name: str = ""
    description: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    copyright_text: str = ""
    social_links: dict[str, str] = {}
    quick_links: list[dict[str, Any]] = []


class MediaItemResponse(BaseModel):
    id: int
    name: str
    type: str
    url: str
    size: int | None
    alt_text: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
