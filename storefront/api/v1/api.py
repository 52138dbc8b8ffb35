"""API v1 router composition."""

from fastapi import APIRouter

from storefront.api.v1.endpoints import (
    admin,
    auth,
    bank_accounts,
    cart,
    categories,
    cms,
    delivery,
    media,
    orders,
    products,
    reviews,
)

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(products.router, prefix="/products", tags=["catalog"])
api_router.include_router(categories.router, prefix="/categories", tags=["catalog"])
api_router.include_router(cart.router, prefix="/cart", tags=["cart"])
api_router.include_router(delivery.router, prefix="/delivery", tags=["delivery"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(bank_accounts.router, prefix="/bank-accounts", tags=["bank-accounts"])
api_router.include_router(cms.router, prefix="/cms", tags=["cms"])
api_router.include_router(media.router, prefix="/media", tags=["media"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
