"""Bank accounts shown as bank-transfer destinations at checkout."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.models import BankAccount

logger = logging.getLogger(__name__)


class DefaultBankAccountError(Exception):
    """Raised when trying to delete the default account."""


def list_bank_accounts(db: Session, *, active_only: bool = False) -> list[BankAccount]:
    stmt = select(BankAccount)
    if active_only:
        stmt = stmt.where(BankAccount.is_active.is_(True))
    return list(db.scalars(stmt.order_by(BankAccount.bank_name.asc(), BankAccount.id.asc())).all())


def _clear_default(db: Session, *, except_id: int | None = None) -> None:
    stmt = update(BankAccount).where(BankAccount.is_default.is_(True))
    if except_id is not None:
        stmt = stmt.where(BankAccount.id != except_id)
    db.execute(stmt.values(is_default=False))


def get_default_bank_account(db: Session) -> BankAccount | None:
    """Return the default account, promoting the first account when none is marked."""
    account = db.scalar(select(BankAccount).where(BankAccount.is_default.is_(True)).limit(1))
    if account is not None:
        return account

    first = db.scalar(select(BankAccount).order_by(BankAccount.id.asc()).limit(1))
    if first is None:
        return None
    first.is_default = True
    db.commit()
    db.refresh(first)
    logger.info("[BANK] No default bank account; promoted id=%s.", first.id)
    return first


def create_bank_account(db: Session, data: dict[str, Any]) -> BankAccount:
    if data.get("is_default"):
        _clear_default(db)
    account = BankAccount(
        bank_name=data["bank_name"],
        account_number=data["account_number"],
        account_holder=data["account_holder"],
        description=data.get("description") or None,
        is_default=data.get("is_default") is True,
        is_active=data.get("is_active", True) is True,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def update_bank_account(db: Session, account: BankAccount, changes: dict[str, Any]) -> BankAccount:
    if changes.get("is_default"):
        _clear_default(db, except_id=account.id)
    for field_name in ("bank_name", "account_number", "account_holder", "description", "is_default", "is_active"):
        if field_name in changes:
            setattr(account, field_name, changes[field_name])
    if account.description == "":
        account.description = None
    db.commit()
    db.refresh(account)
    return account


def set_default_bank_account(db: Session, account: BankAccount) -> BankAccount:
    return update_bank_account(db, account, {"is_default": True})


def delete_bank_account(db: Session, account: BankAccount) -> None:
    if account.is_default:
        raise DefaultBankAccountError("Default bank account cannot be deleted")
    db.delete(account)
    db.commit()
