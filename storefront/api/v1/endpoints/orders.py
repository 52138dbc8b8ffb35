"""Checkout and order endpoints."""

from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from storefront.auth import current_user, require_admin
from storefront.db.session import get_db
from storefront.models import Order, User
from storefront.schemas.bank_account import BankAccountResponse
from storefront.schemas.order import CheckoutRequest, CheckoutResponse, OrderResponse, OrderStatusUpdate
from storefront.services.audit_service import log_action, order_snapshot
from storefront.services.bank_account_service import get_default_bank_account
from storefront.services.cart import CartStore
from storefront.services.order_service import CustomerDetails, EmptyCartError, get_order, list_orders, place_order
from storefront.services.order_status import InvalidStatusTransitionError, set_status
from storefront.utils.time import now_local

router: APIRouter = APIRouter()


def _customer_details(payload: CheckoutRequest, user: User) -> CustomerDetails:
    name = payload.customer_name or user.name or user.username
    email = payload.customer_email or user.email
    phone = payload.customer_phone or user.phone
    if not phone:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Phone number is required")
    return CustomerDetails(
        name=name,
        email=email,
        phone=phone,
        address=payload.customer_address,
        notes=payload.notes,
    )


@router.post("", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
def checkout(
    payload: CheckoutRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> CheckoutResponse:
    """Place an order from the session cart and clear the cart."""
    store = CartStore(request.session)
    try:
        order = place_order(
            db,
            cart=store.load(),
            customer=_customer_details(payload, user),
            user=user,
            now=now_local(),
        )
    except EmptyCartError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    store.save(store.load().clear())

    order_payload = OrderResponse.model_validate(order)
    account = get_default_bank_account(db)
    return CheckoutResponse(
        order=order_payload,
        bank_account=BankAccountResponse.model_validate(account) if account is not None else None,
    )


@router.get("", response_model=list[OrderResponse])
def get_orders(
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> list[Order]:
    """Admins see every order in the window; customers see only their own."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start_date must not be after end_date")
    owner_id = None if user.is_admin else user.id
    return list_orders(db, user_id=owner_id, start_date=start_date, end_date=end_date)


@router.get("/{order_id}", response_model=OrderResponse)
def get_single_order(
    order_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(current_user),
) -> Order:
    order = get_order(db, order_id)
    if order is None or (not user.is_admin and order.user_id != user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> Order:
    order = get_order(db, order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

    before = order_snapshot(order)
    try:
        set_status(order, payload.status.strip().lower(), datetime.now(timezone.utc))
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    log_action(db, actor=admin, action_type="order_status_change", order=order, before=before, after=order_snapshot(order))
    db.commit()
    db.refresh(order)
    return order
