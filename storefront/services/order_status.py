"""Order status transition helpers."""

from __future__ import annotations

from datetime import datetime

from storefront.models.order import Order

ORDER_STATUSES: list[str] = ["pending", "processing", "completed", "cancelled"]

# "processing" means the bank transfer has been received.
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"processing", "cancelled"},
    "processing": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


class InvalidStatusTransitionError(Exception):
    """Raised when an order cannot move to the requested status."""


def can_transition(current: str, new: str) -> bool:
    """Return whether order can move from current to new status."""
    return new in ALLOWED_TRANSITIONS.get(current, set())


def set_status(order: Order, new_status: str, now: datetime) -> None:
    """Set status and update corresponding timestamps."""
    if new_status not in ORDER_STATUSES:
        raise InvalidStatusTransitionError(f"Unknown status: {new_status}")
    if not can_transition(order.status, new_status):
        raise InvalidStatusTransitionError(f"Cannot change status from {order.status} to {new_status}")

    order.status = new_status
    order.status_updated_at = now

    if new_status == "processing":
        order.paid_at = now
    elif new_status == "completed":
        order.completed_at = now
    elif new_status == "cancelled":
        order.cancelled_at = now
