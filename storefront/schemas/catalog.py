"""Product and category schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CategoryBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: str | None = None
    image_url: str | None = None
    sort_order: int = 0
    is_active: bool = True


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: str | None = None
    image_url: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CategoryResponse(CategoryBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReorderRequest(BaseModel):
    """Ids in their new display order."""

    ids: list[int]


class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    name_ru: str | None = None
    name_en: str | None = None
    description: str = ""
    description_ru: str | None = None
    description_en: str | None = None
    category: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0)
    image_url: str = ""
    stock: Decimal = Field(default=Decimal("0"), ge=0)
    min_order_quantity: Decimal = Field(default=Decimal("1"), gt=0)
    unit_size: Decimal = Field(default=Decimal("1"), gt=0)
    is_active: bool = True


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    name_ru: str | None = None
    name_en: str | None = None
    description: str | None = None
    description_ru: str | None = None
    description_en: str | None = None
    category: str | None = Field(default=None, min_length=1, max_length=255)
    price: Decimal | None = Field(default=None, ge=0)
    image_url: str | None = None
    stock: Decimal | None = Field(default=None, ge=0)
    min_order_quantity: Decimal | None = Field(default=None, gt=0)
    unit_size: Decimal | None = Field(default=None, gt=0)
    is_active: bool | None = None


class ProductResponse(ProductBase):
    id: int
    created_at: datetime
    display_name: str | None = None

    model_config = ConfigDict(from_attributes=True)
