"""Session cart schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field

# Matches the Numeric(10, 3) order line column so checkout snapshots are exact.
QUANTITY_PLACES = 3


class CartAddRequest(BaseModel):
    product_id: int
    quantity: Decimal = Field(gt=0, max_digits=10, decimal_places=QUANTITY_PLACES)


class CartUpdateRequest(BaseModel):
    """New quantity for a line; zero or less removes it."""

    quantity: Decimal = Field(max_digits=10, decimal_places=QUANTITY_PLACES)


class CartItemResponse(BaseModel):
    product_id: int
    name: str
    price: Decimal
    quantity: Decimal
    image_url: str
    unit_size: Decimal
    line_total: Decimal


class CartResponse(BaseModel):
    items: list[CartItemResponse]
    total_price: Decimal
    item_count: int
