"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import update
from sqlalchemy.orm import Session

from storefront.auth import require_admin
from storefront.db.session import get_db
from storefront.i18n import resolve_language
from storefront.models import OrderItem, Product
from storefront.schemas.catalog import ProductCreate, ProductResponse, ProductUpdate
from storefront.services.catalog_service import list_products

router: APIRouter = APIRouter()


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


def _localized(product: Product, language: str) -> ProductResponse:
    response = ProductResponse.model_validate(product)
    response.display_name = product.localized_name(language)
    return response


@router.get("", response_model=list[ProductResponse])
def get_products(
    request: Request,
    category: str | None = None,
    lang: str | None = None,
    db: Session = Depends(get_db),
) -> list[ProductResponse]:
    language = resolve_language(request, lang)
    return [_localized(product, language) for product in list_products(db, category=category)]


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, request: Request, lang: str | None = None, db: Session = Depends(get_db)) -> ProductResponse:
    product = _get_product_or_404(db, product_id)
    if not product.is_active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return _localized(product, resolve_language(request, lang))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_product(payload: ProductCreate, db: Session = Depends(get_db)) -> Product:
    product = Product(**payload.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)) -> Product:
    product = _get_product_or_404(db, product_id)
    for field_name, value in payload.model_dump(exclude_unset=True).items():
        setattr(product, field_name, value)
    db.commit()
    db.refresh(product)
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_product(product_id: int, db: Session = Depends(get_db)) -> None:
    product = _get_product_or_404(db, product_id)
    # Order lines keep their name/price snapshot.
    db.execute(update(OrderItem).where(OrderItem.product_id == product.id).values(product_id=None))
    db.delete(product)
    db.commit()
