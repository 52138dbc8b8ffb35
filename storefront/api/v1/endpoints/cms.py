"""Content management: navigation menu, content blocks and site settings."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.auth import require_admin
from storefront.db.session import get_db
from storefront.models import NavigationItem, SiteContent
from storefront.schemas.catalog import ReorderRequest
from storefront.schemas.cms import (
    FooterPayload,
    HeroPayload,
    LogoPayload,
    NavigationItemCreate,
    NavigationItemResponse,
    NavigationItemUpdate,
    NavigationNode,
    ShippingFeePayload,
    SiteContentCreate,
    SiteContentResponse,
    SiteContentUpdate,
    SiteNamePayload,
)
from storefront.services.cms_service import (
    build_navigation_tree,
    get_content_by_key,
    list_navigation_items,
    reorder_navigation_items,
)
from storefront.services.settings_service import (
    DEFAULT_FOOTER,
    DEFAULT_HERO,
    DEFAULT_SITE_NAME,
    FOOTER_KEY,
    HERO_KEY,
    LOGO_KEY,
    SHIPPING_FEE_KEY,
    SITE_NAME_KEY,
    get_json_setting,
    get_shipping_fee,
    get_site_setting,
    set_json_setting,
    set_site_setting,
)

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


# Navigation

@router.get("/navigation", response_model=list[NavigationItemResponse])
def get_navigation(db: Session = Depends(get_db)) -> list[NavigationItem]:
    return list_navigation_items(db, active_only=True)


@router.get("/navigation/tree", response_model=list[NavigationNode])
def get_navigation_tree(db: Session = Depends(get_db)) -> list[dict[str, Any]]:
    return build_navigation_tree(list_navigation_items(db, active_only=True))


def _check_parent(db: Session, parent_id: int | None, item_id: int | None = None) -> None:
    if parent_id is None:
        return
    if parent_id == item_id or db.get(NavigationItem, parent_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid parent navigation item")


@router.post(
    "/navigation",
    response_model=NavigationItemResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_navigation_item(payload: NavigationItemCreate, db: Session = Depends(get_db)) -> NavigationItem:
    _check_parent(db, payload.parent_id)
    item = NavigationItem(**payload.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.post("/navigation/reorder", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def reorder_navigation(payload: ReorderRequest, db: Session = Depends(get_db)) -> None:
    reorder_navigation_items(db, payload.ids)


@router.put("/navigation/{item_id}", response_model=NavigationItemResponse, dependencies=[Depends(require_admin)])
def update_navigation_item(item_id: int, payload: NavigationItemUpdate, db: Session = Depends(get_db)) -> NavigationItem:
    item = db.get(NavigationItem, item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Navigation item not found")
    changes = payload.model_dump(exclude_unset=True)
    if "parent_id" in changes:
        _check_parent(db, changes["parent_id"], item.id)
    for field_name, value in changes.items():
        setattr(item, field_name, value)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/navigation/{item_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_navigation_item(item_id: int, db: Session = Depends(get_db)) -> None:
    item = db.get(NavigationItem, item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Navigation item not found")
    for child in list_navigation_items(db):
        if child.parent_id == item.id:
            child.parent_id = item.parent_id
    db.delete(item)
    db.commit()


# Content blocks

@router.get("/content", response_model=list[SiteContentResponse])
def get_content_blocks(db: Session = Depends(get_db)) -> list[SiteContent]:
    stmt = select(SiteContent).where(SiteContent.active.is_(True)).order_by(SiteContent.key.asc())
    return list(db.scalars(stmt).all())


@router.get("/content/{key}", response_model=SiteContentResponse)
def get_content_block(key: str, db: Session = Depends(get_db)) -> SiteContent:
    block = get_content_by_key(db, key)
    if block is None or not block.active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content not found")
    return block


@router.post(
    "/content",
    response_model=SiteContentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_content_block(payload: SiteContentCreate, db: Session = Depends(get_db)) -> SiteContent:
    block = SiteContent(**payload.model_dump())
    db.add(block)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Content key already exists") from exc
    db.refresh(block)
    return block


@router.put("/content/{key}", response_model=SiteContentResponse, dependencies=[Depends(require_admin)])
def update_content_block(key: str, payload: SiteContentUpdate, db: Session = Depends(get_db)) -> SiteContent:
    block = get_content_by_key(db, key)
    if block is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content not found")
    for field_name, value in payload.model_dump(exclude_unset=True).items():
        setattr(block, field_name, value)
    db.commit()
    db.refresh(block)
    return block


@router.delete("/content/{key}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_content_block(key: str, db: Session = Depends(get_db)) -> None:
    block = get_content_by_key(db, key)
    if block is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content not found")
    db.delete(block)
    db.commit()


# Site settings

@router.get("/settings")
def get_site_settings(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Every storefront-wide setting, with defaults filled in on first read."""
    return {
        "shipping_fee": str(get_shipping_fee(db)),
        "site_name": get_site_setting(db, SITE_NAME_KEY, default=DEFAULT_SITE_NAME, description="Website name").value,
        "logo_url": get_site_setting(db, LOGO_KEY, default="", description="Header logo").value,
        "hero": get_json_setting(db, HERO_KEY, DEFAULT_HERO, "Home page hero banner"),
        "footer": get_json_setting(db, FOOTER_KEY, DEFAULT_FOOTER, "Footer contents"),
    }


@router.put("/settings/shipping-fee", dependencies=[Depends(require_admin)])
def update_shipping_fee(payload: ShippingFeePayload, db: Session = Depends(get_db)) -> dict[str, str]:
    set_site_setting(db, SHIPPING_FEE_KEY, str(payload.shipping_fee), description="Default shipping fee")
    logger.info("[SETTINGS] Shipping fee set to %s", payload.shipping_fee)
    return {"shipping_fee": str(get_shipping_fee(db))}


@router.put("/settings/site-name", dependencies=[Depends(require_admin)])
def update_site_name(payload: SiteNamePayload, db: Session = Depends(get_db)) -> dict[str, str]:
    row = set_site_setting(db, SITE_NAME_KEY, payload.site_name.strip(), description="Website name")
    return {"site_name": row.value}


@router.put("/settings/logo", dependencies=[Depends(require_admin)])
def update_logo(payload: LogoPayload, db: Session = Depends(get_db)) -> dict[str, str]:
    row = set_site_setting(db, LOGO_KEY, payload.logo_url.strip(), description="Header logo")
    return {"logo_url": row.value}


@router.put("/settings/hero", dependencies=[Depends(require_admin)])
def update_hero(payload: HeroPayload, db: Session = Depends(get_db)) -> dict[str, Any]:
    return set_json_setting(db, HERO_KEY, payload.model_dump(), "Home page hero banner")


@router.put("/settings/footer", dependencies=[Depends(require_admin)])
def update_footer(payload: FooterPayload, db: Session = Depends(get_db)) -> dict[str, Any]:
    return set_json_setting(db, FOOTER_KEY, payload.model_dump(), "Footer contents")
