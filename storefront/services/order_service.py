"""Checkout: turn the session cart into a bank-transfer order."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from storefront.models import Order, OrderItem, Product, User
from storefront.services.cart import Cart
from storefront.services.delivery_calendar import calculate_delivery_date
from storefront.services.settings_service import get_delivery_settings, get_shipping_fee, list_non_delivery_days
from storefront.utils.time import day_window_utc

logger = logging.getLogger(__name__)

MONEY_QUANT = Decimal("0.01")


class EmptyCartError(Exception):
    """Raised when checkout is attempted with an empty cart."""


@dataclass(frozen=True)
class CustomerDetails:
    name: str
    email: str
    phone: str
    address: str
    notes: str | None = None


def quote_delivery_date(db: Session, now: datetime) -> date:
    """Delivery date for an order placed at ``now`` using stored settings."""
    return calculate_delivery_date(get_delivery_settings(db), list_non_delivery_days(db), now)


def place_order(
    db: Session,
    *,
    cart: Cart,
    customer: CustomerDetails,
    user: User | None,
    now: datetime,
) -> Order:
    """Create the order, snapshot its lines and decrement stock."""
    if cart.is_empty:
        raise EmptyCartError("Cart is empty")

    subtotal = cart.total_price.quantize(MONEY_QUANT)
    shipping_fee = get_shipping_fee(db).quantize(MONEY_QUANT)

    order = Order(
        user_id=user.id if user is not None else None,
        customer_name=customer.name,
        customer_email=customer.email,
        customer_phone=customer.phone,
        customer_address=customer.address,
        notes=customer.notes,
        payment_method="bank_transfer",
        subtotal_amount=subtotal,
        shipping_fee=shipping_fee,
        total_amount=subtotal + shipping_fee,
        status="pending",
        delivery_date=quote_delivery_date(db, now),
        created_at=now.astimezone(timezone.utc),
    )
    db.add(order)

    for item in cart.items:
        order.items.append(
            OrderItem(
                product_id=item.product_id,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                unit_size=item.unit_size,
            )
        )
        product = db.get(Product, item.product_id)
        if product is not None:
            product.stock = Decimal(product.stock) - item.quantity
        else:
            logger.warning("[ORDER] Product %s vanished before checkout; stock not adjusted.", item.product_id)

    db.commit()
    db.refresh(order)
    logger.info("[ORDER] Order %s placed: total=%s delivery=%s", order.id, order.total_amount, order.delivery_date)
    return order


def list_orders(
    db: Session,
    *,
    user_id: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[Order]:
    """Return orders newest first, optionally for one user and a local date range."""
    stmt = select(Order).options(selectinload(Order.items))
    if user_id is not None:
        stmt = stmt.where(Order.user_id == user_id)
    start_at, end_at = day_window_utc(start_date, end_date)
    if start_at is not None:
        stmt = stmt.where(Order.created_at >= start_at)
    if end_at is not None:
        stmt = stmt.where(Order.created_at < end_at)
    return list(db.scalars(stmt.order_by(Order.created_at.desc(), Order.id.desc())).all())


def get_order(db: Session, order_id: int) -> Order | None:
    return db.scalar(select(Order).options(selectinload(Order.items)).where(Order.id == order_id))


def count_pending_orders(db: Session) -> int:
    return db.scalar(select(func.count(Order.id)).where(Order.status == "pending")) or 0
