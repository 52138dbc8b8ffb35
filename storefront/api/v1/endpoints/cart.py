"""Session cart endpoints."""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from storefront.db.session import get_db
from storefront.schemas.cart import CartAddRequest, CartItemResponse, CartResponse, CartUpdateRequest
from storefront.services.cart import Cart, CartStore
from storefront.services.catalog_service import (
    MinimumQuantityError,
    ProductUnavailableError,
    build_cart_item,
    ensure_minimum_quantity,
    get_available_product,
)

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


def cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        items=[
            CartItemResponse(
                product_id=item.product_id,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                image_url=item.image_url,
                unit_size=item.unit_size,
                line_total=item.line_total,
            )
            for item in cart.items
        ],
        total_price=cart.total_price,
        item_count=cart.item_count,
    )


@router.get("", response_model=CartResponse)
def get_cart(request: Request) -> CartResponse:
    return cart_response(CartStore(request.session).load())


@router.post("/items", response_model=CartResponse)
def add_item(payload: CartAddRequest, request: Request, db: Session = Depends(get_db)) -> CartResponse:
    try:
        item = build_cart_item(db, payload.product_id, payload.quantity)
    except ProductUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except MinimumQuantityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    store = CartStore(request.session)
    cart = store.save(store.load().add_item(item))
    logger.info("[CART] Added product_id=%s qty=%s", item.product_id, item.quantity)
    return cart_response(cart)


@router.put("/items/{product_id}", response_model=CartResponse)
def update_item(
    product_id: int,
    payload: CartUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> CartResponse:
    store = CartStore(request.session)
    cart = store.load()
    if cart.find(product_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not in cart")
    if payload.quantity <= Decimal("0"):
        return cart_response(store.save(cart.remove_item(product_id)))
    try:
        ensure_minimum_quantity(get_available_product(db, product_id), payload.quantity)
    except ProductUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except MinimumQuantityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return cart_response(store.save(cart.update_quantity(product_id, payload.quantity)))


@router.delete("/items/{product_id}", response_model=CartResponse)
def remove_item(product_id: int, request: Request) -> CartResponse:
    store = CartStore(request.session)
    return cart_response(store.save(store.load().remove_item(product_id)))


@router.delete("", response_model=CartResponse)
def clear_cart(request: Request) -> CartResponse:
    store = CartStore(request.session)
    return cart_response(store.save(store.load().clear()))
