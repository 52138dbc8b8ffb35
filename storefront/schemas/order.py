"""Checkout and order schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.bank_account import BankAccountResponse


class CheckoutRequest(BaseModel):
    """Delivery contact details; missing name/e-mail/phone fall back to the account."""

    customer_name: str | None = Field(default=None, max_length=255)
    customer_email: str | None = Field(default=None, max_length=255)
    customer_phone: str | None = Field(default=None, max_length=32)
    customer_address: str = Field(min_length=1)
    notes: str | None = None


class OrderItemResponse(BaseModel):
    product_id: int | None
    name: str
    price: Decimal
    quantity: Decimal
    unit_size: Decimal
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    id: int
    user_id: int | None
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    notes: str | None
    payment_method: str
    subtotal_amount: Decimal
    shipping_fee: Decimal
    total_amount: Decimal
    status: str
    delivery_date: date
    created_at: datetime
    status_updated_at: datetime | None = None
    paid_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    items: list[OrderItemResponse]

    model_config = ConfigDict(from_attributes=True)


class CheckoutResponse(BaseModel):
    """Created order plus where to send the bank transfer."""

    order: OrderResponse
    bank_account: BankAccountResponse | None


class OrderStatusUpdate(BaseModel):
    status: str


class PendingCountResponse(BaseModel):
    pending: int
