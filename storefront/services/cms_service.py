"""Navigation menu and content block helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.models import NavigationItem, SiteContent


def list_navigation_items(db: Session, *, active_only: bool = False) -> list[NavigationItem]:
    stmt = select(NavigationItem)
    if active_only:
        stmt = stmt.where(NavigationItem.is_active.is_(True))
    return list(db.scalars(stmt.order_by(NavigationItem.sort_order.asc(), NavigationItem.id.asc())).all())


def build_navigation_tree(items: list[NavigationItem]) -> list[dict[str, Any]]:
    """Nest items under their parents, keeping ``sort_order`` within each level.

    Items whose parent is missing from ``items`` (inactive or deleted) are
    dropped along with their subtree.
    """
    children: dict[int | None, list[NavigationItem]] = {}
    for item in items:
        children.setdefault(item.parent_id, []).append(item)

    def _build(parent_id: int | None, seen: frozenset[int]) -> list[dict[str, Any]]:
        nodes = []
        for item in children.get(parent_id, []):
            if item.id in seen:
                continue
            nodes.append(
                {
                    "id": item.id,
                    "title": item.title,
                    "url": item.url,
                    "sort_order": item.sort_order,
                    "parent_id": item.parent_id,
                    "is_active": item.is_active,
                    "children": _build(item.id, seen | {item.id}),
                }
            )
        return nodes

    return _build(None, frozenset())


def reorder_navigation_items(db: Session, item_ids: list[int]) -> None:
    for position, item_id in enumerate(item_ids):
        item = db.get(NavigationItem, item_id)
        if item is not None:
            item.sort_order = position
    db.commit()


def get_content_by_key(db: Session, key: str) -> SiteContent | None:
    return db.scalar(select(SiteContent).where(SiteContent.key == key).limit(1))
