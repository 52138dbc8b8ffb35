"""Pydantic schemas exposed by the API."""

from storefront.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from storefront.schemas.bank_account import BankAccountCreate, BankAccountResponse, BankAccountUpdate
from storefront.schemas.cart import CartAddRequest, CartItemResponse, CartResponse, CartUpdateRequest
from storefront.schemas.catalog import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    ReorderRequest,
)
from storefront.schemas.delivery import (
    DeliveryEstimateResponse,
    DeliverySettingsResponse,
    DeliverySettingsUpdate,
    NonDeliveryDayCreate,
    NonDeliveryDayResponse,
)
from storefront.schemas.order import (
    CheckoutRequest,
    CheckoutResponse,
    OrderResponse,
    OrderStatusUpdate,
    PendingCountResponse,
)
from storefront.schemas.review import ReviewCreate, ReviewResponse

__all__ = [
    "BankAccountCreate",
    "BankAccountResponse",
    "BankAccountUpdate",
    "CartAddRequest",
    "CartItemResponse",
    "CartResponse",
    "CartUpdateRequest",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "CheckoutRequest",
    "CheckoutResponse",
    "DeliveryEstimateResponse",
    "DeliverySettingsResponse",
    "DeliverySettingsUpdate",
    "LoginRequest",
    "NonDeliveryDayCreate",
    "NonDeliveryDayResponse",
    "OrderResponse",
    "OrderStatusUpdate",
    "PendingCountResponse",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "RegisterRequest",
    "ReorderRequest",
    "ReviewCreate",
    "ReviewResponse",
    "TokenResponse",
    "UserResponse",
]
