"""Shopping cart state, totals and session persistence.

``Cart`` is an immutable value: every mutation returns a new cart, and the
HTTP layer writes the result back to the session through ``CartStore``.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

CART_SESSION_KEY: str = "cart"


@dataclass(frozen=True)
class CartItem:
    """Single cart line; ``quantity`` is in base units (kg), ``price`` per ``unit_size``."""

    product_id: int
    name: str
    price: Decimal
    quantity: Decimal
    image_url: str = ""
    unit_size: Decimal = Decimal("1")

    @property
    def line_total(self) -> Decimal:
        return self.price * (self.quantity / self.unit_size)

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": str(self.price),
            "quantity": str(self.quantity),
            "image_url": self.image_url,
            "unit_size": str(self.unit_size),
        }


@dataclass(frozen=True)
class Cart:
    """Collection of cart lines with at most one line per product."""

    items: tuple[CartItem, ...] = field(default_factory=tuple)

    def find(self, product_id: int) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_item(self, new_item: CartItem) -> Cart:
        """Append ``new_item`` or add its quantity to the existing line."""
        existing = self.find(new_item.product_id)
        if existing is None:
            return Cart(items=(*self.items, new_item))
        merged = replace(existing, quantity=existing.quantity + new_item.quantity)
        return Cart(items=tuple(merged if item is existing else item for item in self.items))

    def update_quantity(self, product_id: int, quantity: Decimal) -> Cart:
        return Cart(
            items=tuple(
                replace(item, quantity=quantity) if item.product_id == product_id else item
                for item in self.items
            )
        )

    def remove_item(self, product_id: int) -> Cart:
        return Cart(items=tuple(item for item in self.items if item.product_id != product_id))

    def clear(self) -> Cart:
        return Cart()

    @property
    def total_price(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_payload(self) -> list[dict[str, Any]]:
        return [item.to_dict() for item in self.items]


class PersistedCartItem(BaseModel):
    """Shape accepted when reading a cart back from storage."""

    model_config = ConfigDict(extra="ignore")

    product_id: int
    name: str
    price: Decimal
    quantity: Decimal = Field(max_digits=10, decimal_places=3)
    image_url: str = ""
    unit_size: Decimal = Field(default=Decimal("1"), gt=0)


_persisted_cart_adapter: TypeAdapter[list[PersistedCartItem]] = TypeAdapter(list[PersistedCartItem])


@dataclass(frozen=True)
class CartParseResult:
    """Outcome of ``parse_cart_items``: either ``items`` or an ``error``."""

    items: tuple[CartItem, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_cart_items(raw: Any) -> CartParseResult:
    """Validate a persisted cart payload without raising."""
    try:
        parsed = _persisted_cart_adapter.validate_python(raw)
    except ValidationError as exc:
        return CartParseResult(error=f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}")

    product_ids = [entry.product_id for entry in parsed]
    if len(product_ids) != len(set(product_ids)):
        return CartParseResult(error="duplicate product_id in cart")

    return CartParseResult(
        items=tuple(
            CartItem(
                product_id=entry.product_id,
                name=entry.name,
                price=entry.price,
                quantity=entry.quantity,
                image_url=entry.image_url,
                unit_size=entry.unit_size,
            )
            for entry in parsed
        )
    )


class CartStore:
    """Durable key-value slot holding the serialized cart."""

    def __init__(self, storage: MutableMapping[str, Any], key: str = CART_SESSION_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> Cart:
        """Rehydrate the cart; corrupt data is discarded and an empty cart returned."""
        if self._key not in self._storage:
            return Cart()
        result = parse_cart_items(self._storage[self._key])
        if not result.ok:
            logger.warning("[CART] Discarding invalid persisted cart: %s", result.error)
            del self._storage[self._key]
            return Cart()
        return Cart(items=result.items)

    def save(self, cart: Cart) -> Cart:
        self._storage[self._key] = cart.to_payload()
        return cart
