"""Product and category queries used by the storefront and admin CMS."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.models.catalog import Category, Product
from storefront.services.cart import CartItem


class ProductUnavailableError(Exception):
    """Raised when a product cannot be added to the cart."""


class MinimumQuantityError(Exception):
    """Raised when the requested quantity is below the product minimum."""


def list_products(db: Session, *, category: str | None = None, include_inactive: bool = False) -> list[Product]:
    stmt = select(Product)
    if category:
        stmt = stmt.where(Product.category == category)
    if not include_inactive:
        stmt = stmt.where(Product.is_active.is_(True))
    return list(db.scalars(stmt.order_by(Product.id.asc())).all())


def list_categories(db: Session, *, include_inactive: bool = False) -> list[Category]:
    stmt = select(Category)
    if not include_inactive:
        stmt = stmt.where(Category.is_active.is_(True))
    return list(db.scalars(stmt.order_by(Category.sort_order.asc(), Category.id.asc())).all())


def get_category_by_slug(db: Session, slug: str) -> Category | None:
    return db.scalar(select(Category).where(Category.slug == slug).limit(1))


def reorder_categories(db: Session, category_ids: list[int]) -> None:
    """Assign ``sort_order`` from the position of each id in ``category_ids``."""
    for position, category_id in enumerate(category_ids):
        category = db.get(Category, category_id)
        if category is not None:
            category.sort_order = position
    db.commit()


def get_available_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None or not product.is_active:
        raise ProductUnavailableError(f"Product {product_id} is not available")
    return product


def ensure_minimum_quantity(product: Product, quantity: Decimal) -> None:
    if quantity < Decimal(product.min_order_quantity):
        raise MinimumQuantityError(
            f"Minimum order quantity for {product.name} is {Decimal(product.min_order_quantity).normalize()}"
        )


def build_cart_item(db: Session, product_id: int, quantity: Decimal) -> CartItem:
    """Snapshot a product into a cart line, enforcing availability and minimum."""
    product = get_available_product(db, product_id)
    ensure_minimum_quantity(product, quantity)
    return CartItem(
        product_id=product.id,
        name=product.name,
        price=Decimal(product.price),
        quantity=quantity,
        image_url=product.image_url or "",
        unit_size=Decimal(product.unit_size),
    )
