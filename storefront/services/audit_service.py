"""Audit trail for admin actions on orders, settings and exports."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from storefront.models import AuditLog, Order, User


def order_snapshot(order: Order) -> dict[str, Any]:
    """JSON-safe view of the order fields admins can change."""
    return {
        "status": order.status,
        "total_amount": str(order.total_amount),
        "delivery_date": order.delivery_date.isoformat() if order.delivery_date else None,
        "paid_at": order.paid_at.isoformat() if order.paid_at else None,
    }


def log_action(
    db: Session,
    *,
    actor: User | None,
    action_type: str,
    order: Order | None = None,
    before: dict[str, Any] | None = None,
    after: dict[str, Any] | None = None,
) -> AuditLog:
    """Stage an audit row in the caller's transaction."""
    entry = AuditLog(
        actor_user_id=actor.id if actor is not None else None,
        actor_identifier=(actor.email or actor.username) if actor is not None else "anonymous",
        action_type=action_type,
        order_id=order.id if order is not None else None,
        before_snapshot=before,
        after_snapshot=after,
    )
    db.add(entry)
    return entry
