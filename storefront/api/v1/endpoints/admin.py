"""Admin dashboard data: users, pending orders and the PDF order report."""

import logging
from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from storefront.auth import require_admin
from storefront.db.session import get_db
from storefront.models import User
from storefront.schemas.auth import UserResponse
from storefront.schemas.order import PendingCountResponse
from storefront.services.audit_service import log_action
from storefront.services.order_service import count_pending_orders, list_orders
from storefront.services.pdf_exports import render_orders_pdf, report_filename
from storefront.services.user_service import list_users
from storefront.utils.time import now_local

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/users", response_model=list[UserResponse], dependencies=[Depends(require_admin)])
def get_users(db: Session = Depends(get_db)) -> list[User]:
    return list_users(db)


@router.get("/orders/pending-count", response_model=PendingCountResponse, dependencies=[Depends(require_admin)])
def pending_count(db: Session = Depends(get_db)) -> PendingCountResponse:
    return PendingCountResponse(pending=count_pending_orders(db))


@router.get("/reports/orders.pdf")
def orders_report(
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> Response:
    """Orders created in the window, grouped by delivery date."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start_date must not be after end_date")

    orders = list_orders(db, start_date=start_date, end_date=end_date)
    payload = render_orders_pdf(
        orders,
        {"title": "Захиалгын тайлан", "generated_at": now_local().strftime("%Y-%m-%d %H:%M")},
    )
    log_action(
        db,
        actor=admin,
        action_type="orders_pdf_export",
        after={
            "start_date": start_date.isoformat() if start_date else None,
            "end_date": end_date.isoformat() if end_date else None,
            "orders": len(orders),
            "exported_at": datetime.now(timezone.utc).isoformat(),
        },
    )
    db.commit()
    logger.info("[ADMIN] PDF report exported by user_id=%s (%s orders)", admin.id, len(orders))

    filename = report_filename(start_date, end_date)
    return Response(
        content=payload,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
